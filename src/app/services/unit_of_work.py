"""Unit of Work Interface

Groups repository writes into a single atomic commit.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """
    Transaction boundary shared by the repositories of one use case

    Everything flushed through the repositories becomes visible on commit()
    and is discarded on rollback(). Leaving the async context without a
    commit rolls back.
    """

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
