"""Integration tests for TopUpWallet and RefundWallet use cases"""

import asyncio
import pytest
from decimal import Decimal

from sqlmodel import select
from src.adapter.repositories import SqlAlchemyWalletRepository, SqlAlchemyWalletTransactionRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.ledger import Ledger
from src.app.services.retry_policy import RetryPolicy
from src.app.use_cases.printshop import (
    ErrorCode,
    RefundCommandDTO,
    RefundWallet,
    TopUpCommandDTO,
    TopUpWallet,
)
from src.domain.base import MAX_MONEY
from src.domain.wallet_transaction import TransactionType, WalletTransaction


def _top_up(session) -> TopUpWallet:
    return TopUpWallet(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyWalletRepository(session),
        Ledger(SqlAlchemyWalletTransactionRepository(session)),
        RetryPolicy(max_attempts=50, backoff_ms=5),
    )


def _refund(session) -> RefundWallet:
    transaction_repo = SqlAlchemyWalletTransactionRepository(session)
    return RefundWallet(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyWalletRepository(session),
        transaction_repo,
        Ledger(transaction_repo),
    )


async def _entries(session_factory, kind: TransactionType):
    async with session_factory() as session:
        result = await session.execute(
            select(WalletTransaction).where(WalletTransaction.transaction_type == kind)
        )
        return list(result.scalars().all())


@pytest.mark.asyncio
class TestTopUpIntegration:
    async def test_top_up_sets_last_topup_at(self, session_factory, open_account):
        await open_account()

        async with session_factory() as session:
            result = await _top_up(session).execute(
                TopUpCommandDTO(student_id="2023001", amount=Decimal("20.00"))
            )

        assert result.is_ok()
        assert result.value.balance_after == Decimal("20.00")

        async with session_factory() as session:
            wallet = await SqlAlchemyWalletRepository(session).get_by_student_id("2023001")
        assert wallet.balance == Decimal("20.00")
        assert wallet.last_topup_at is not None
        assert wallet.version == 1

    async def test_concurrent_top_ups_all_land(self, session_factory, open_account):
        await open_account()

        async def top_up():
            async with session_factory() as session:
                return await _top_up(session).execute(
                    TopUpCommandDTO(student_id="2023001", amount=Decimal("1.25"))
                )

        results = await asyncio.gather(*[top_up() for _ in range(8)])

        assert all(r.is_ok() for r in results)
        assert len({r.value.reference_no for r in results}) == 8

        async with session_factory() as session:
            wallet = await SqlAlchemyWalletRepository(session).get_by_student_id("2023001")
        assert wallet.balance == Decimal("10.00")

    async def test_thousand_top_ups_get_distinct_stored_references(self, session_factory, open_account):
        """
        Given: Ten wallets
        When: 1,000 top-ups run concurrently against them (eight in flight at a time)
        Then: Every top-up lands with its own reference_no, and balances add up
        """
        student_ids = [f"20240{n:02d}" for n in range(10)]
        for student_id in student_ids:
            await open_account(student_id=student_id)

        in_flight = asyncio.Semaphore(8)

        async def top_up(student_id):
            async with in_flight:
                async with session_factory() as session:
                    return await _top_up(session).execute(
                        TopUpCommandDTO(student_id=student_id, amount=Decimal("0.10"))
                    )

        results = await asyncio.gather(*[top_up(student_ids[n % 10]) for n in range(1000)])

        assert all(r.is_ok() for r in results)

        top_ups = await _entries(session_factory, TransactionType.TOPUP)
        assert len(top_ups) == 1000
        assert len({entry.reference_no for entry in top_ups}) == 1000

        async with session_factory() as session:
            wallets = await SqlAlchemyWalletRepository(session).get_all()
        assert all(wallet.balance == Decimal("10.00") for wallet in wallets)

    async def test_amount_above_money_limit_is_rejected(self, session_factory, open_account):
        await open_account(balance=Decimal("5.00"))

        async with session_factory() as session:
            result = await _top_up(session).execute(
                TopUpCommandDTO(student_id="2023001", amount=Decimal("12345678901234567.89"))
            )

        assert result.is_err()
        assert result.error.code == ErrorCode.INVALID_AMOUNT

        async with session_factory() as session:
            wallet = await SqlAlchemyWalletRepository(session).get_by_student_id("2023001")
        assert wallet.balance == Decimal("5.00")

    async def test_top_up_past_balance_limit_is_rejected(self, session_factory, open_account):
        await open_account(balance=MAX_MONEY - Decimal("0.50"))

        async with session_factory() as session:
            result = await _top_up(session).execute(
                TopUpCommandDTO(student_id="2023001", amount=Decimal("1.00"))
            )

        assert result.is_err()
        assert result.error.code == ErrorCode.INVALID_AMOUNT

        async with session_factory() as session:
            wallet = await SqlAlchemyWalletRepository(session).get_by_student_id("2023001")
        assert wallet.balance == MAX_MONEY - Decimal("0.50")
        assert len(await _entries(session_factory, TransactionType.TOPUP)) == 1


@pytest.mark.asyncio
class TestRefundIntegration:
    async def test_refund_credits_wallet_with_one_entry(self, session_factory, open_account):
        """
        Given: A wallet with a known balance
        When: 10.00 is refunded
        Then: Balance grows by exactly 10.00 and exactly one Refund entry exists
        """
        wallet = await open_account(balance=Decimal("7.00"))

        async with session_factory() as session:
            result = await _refund(session).execute(
                RefundCommandDTO(wallet_id=wallet.id, amount=Decimal("10.00"))
            )

        assert result.is_ok()
        assert result.value.balance_before == Decimal("7.00")
        assert result.value.balance_after == Decimal("17.00")

        async with session_factory() as session:
            refreshed = await SqlAlchemyWalletRepository(session).get_by_id(wallet.id)
        assert refreshed.balance == Decimal("17.00")

        refunds = await _entries(session_factory, TransactionType.REFUND)
        assert len(refunds) == 1
        assert refunds[0].amount == Decimal("10.00")

    async def test_duplicate_reference_is_rejected(self, session_factory, open_account):
        wallet = await open_account()

        async with session_factory() as session:
            first = await _refund(session).execute(
                RefundCommandDTO(wallet_id=wallet.id, amount=Decimal("2.00"), reference="REF-JAM-0042")
            )
        async with session_factory() as session:
            second = await _refund(session).execute(
                RefundCommandDTO(wallet_id=wallet.id, amount=Decimal("2.00"), reference="REF-JAM-0042")
            )

        assert first.is_ok()
        assert second.is_err()
        assert second.error.code == ErrorCode.DUPLICATE_REFERENCE

        async with session_factory() as session:
            refreshed = await SqlAlchemyWalletRepository(session).get_by_id(wallet.id)
        assert refreshed.balance == Decimal("2.00")

    async def test_unknown_wallet(self, session_factory):
        async with session_factory() as session:
            result = await _refund(session).execute(RefundCommandDTO(wallet_id=999, amount=Decimal("1.00")))

        assert result.is_err()
        assert result.error.code == ErrorCode.WALLET_NOT_FOUND

    async def test_refund_past_balance_limit_is_rejected(self, session_factory, open_account):
        wallet = await open_account(balance=MAX_MONEY)

        async with session_factory() as session:
            result = await _refund(session).execute(
                RefundCommandDTO(wallet_id=wallet.id, amount=Decimal("0.01"))
            )

        assert result.is_err()
        assert result.error.code == ErrorCode.INVALID_AMOUNT
        assert await _entries(session_factory, TransactionType.REFUND) == []

        async with session_factory() as session:
            refreshed = await SqlAlchemyWalletRepository(session).get_by_id(wallet.id)
        assert refreshed.balance == MAX_MONEY
