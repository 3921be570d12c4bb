"""SQLAlchemy UnitOfWork bound to one AsyncSession

Repositories built on the same session share its transaction, so a single
commit() publishes the wallet change, the printing request and the ledger
entry together.
"""

from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        # Nothing to undo after a commit or an earlier rollback
        if self.session.in_transaction():
            await self.session.rollback()
