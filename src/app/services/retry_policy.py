"""Bounded retry for wallet units of work

Settlement, top-up and refund each run as one unit of work. A transient
conflict (lost version compare-and-swap, locked or serialization-failed
database) rolls the unit back and runs it again from the start, a bounded
number of times.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar
from sqlalchemy.exc import DBAPIError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

T = TypeVar("T")

CONFLICT_RETRYABLE = "CONFLICT_RETRYABLE"

# SQLSTATE serialization_failure and deadlock_detected (PostgreSQL)
RETRYABLE_SQLSTATES = {"40001", "40P01"}

# SQLite reports lock contention only through the message
RETRYABLE_MESSAGES = ("database is locked", "database table is locked")


def is_retryable(exc: BaseException) -> bool:
    if getattr(exc, "is_retryable", False):
        return True
    if not isinstance(exc, DBAPIError):
        return False

    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate in RETRYABLE_SQLSTATES:
        return True
    return any(message in str(orig).lower() for message in RETRYABLE_MESSAGES)


class RetryPolicy:
    def __init__(self, max_attempts: int = 5, backoff_ms: int = 20):
        self.max_attempts = max(1, max_attempts)
        self.backoff_ms = backoff_ms

    async def run(
        self,
        uow: UnitOfWork,
        operation: Callable[[], Awaitable[Result[T]]],
        failure_code: str,
        failure_message: str,
    ) -> Result[T]:
        """
        Run operation until it returns, retrying transient conflicts

        operation must open, commit or roll back its own work; when it raises,
        the unit of work is rolled back here before deciding what to do.

        Returns:
            The operation's Result, CONFLICT_RETRYABLE once attempts are
            exhausted, or failure_code for any other exception
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                return await operation()
            except Exception as e:
                await uow.rollback()

                if not is_retryable(e):
                    logger.exception(f"{failure_message}: {e}")
                    return Return.err(
                        Error(code=failure_code, message=failure_message, reason=str(e))
                    )

                if attempt >= self.max_attempts:
                    logger.warning(
                        f"Giving up after {attempt} attempts on concurrent conflict: {e}"
                    )
                    return Return.err(
                        Error(
                            code=CONFLICT_RETRYABLE,
                            message="Wallet is busy, please retry",
                            reason=str(e),
                        )
                    )

                logger.warning(f"Concurrent conflict (attempt {attempt}/{self.max_attempts}), retrying: {e}")
                await asyncio.sleep(self.backoff_ms * attempt / 1000)
