import pytest_asyncio
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers tables on SQLModel.metadata
from src.adapter.repositories import (
    SqlAlchemyStudentRepository,
    SqlAlchemyWalletRepository,
    SqlAlchemyWalletTransactionRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.ledger import Ledger
from src.app.use_cases.printshop import CreateAccount, CreateAccountCommandDTO, TopUpCommandDTO, TopUpWallet
from src.depends import get_session
from src.domain.wallet import Wallet


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Test engine on a throwaway SQLite file, so separate sessions really are separate connections"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'printshop_test.db'}", echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def open_account(session_factory):
    """Open a student account, funding its wallet through a regular top-up"""

    async def _open(student_id: str = "2023001", balance: Decimal = Decimal("0.00")) -> Wallet:
        async with session_factory() as session:
            result = await CreateAccount(
                SqlAlchemyUnitOfWork(session),
                SqlAlchemyStudentRepository(session),
                SqlAlchemyWalletRepository(session),
            ).execute(
                CreateAccountCommandDTO(
                    student_id=student_id,
                    full_name=f"Student {student_id}",
                    email=f"{student_id}@sdckl.edu",
                    password_hash="$2b$12$hash",
                    department="Computer Science",
                )
            )
            assert result.is_ok(), result

            if balance > 0:
                topped_up = await TopUpWallet(
                    SqlAlchemyUnitOfWork(session),
                    SqlAlchemyWalletRepository(session),
                    Ledger(SqlAlchemyWalletTransactionRepository(session)),
                ).execute(TopUpCommandDTO(student_id=student_id, amount=balance))
                assert topped_up.is_ok(), topped_up

            return await SqlAlchemyWalletRepository(session).get_by_student_id(student_id)

    return _open


@pytest_asyncio.fixture
async def client(session_factory):
    """Test client whose requests each get their own session on the test database"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
