from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.pricing_table import PricingTable
from src.app.services.retry_policy import RetryPolicy

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_pricing_table(request: Request) -> PricingTable:
    """Snapshot loaded at startup, defaults if the app skipped its lifespan"""
    table = getattr(request.app.state, "pricing_table", None)
    return table if table is not None else PricingTable.with_defaults()


def get_retry_policy() -> RetryPolicy:
    return RetryPolicy(
        max_attempts=ApplicationConfig.SETTLEMENT_MAX_RETRIES,
        backoff_ms=ApplicationConfig.SETTLEMENT_RETRY_BACKOFF_MS,
    )
