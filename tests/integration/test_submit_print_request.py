"""Integration tests for SubmitPrintRequest use case

Tests cover:
- Settlement against a real database
- Atomicity under failure injection
- Concurrent debits racing on one wallet
"""

import asyncio
import pytest
from decimal import Decimal
from unittest.mock import patch

from sqlmodel import select
from src.adapter.repositories import (
    SqlAlchemyPrintingRequestRepository,
    SqlAlchemyWalletRepository,
    SqlAlchemyWalletTransactionRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.ledger import Ledger
from src.app.services.pricing_table import PricingTable
from src.app.services.retry_policy import RetryPolicy
from src.app.use_cases.printshop import ErrorCode, SubmitPrintRequest, SubmitPrintRequestCommandDTO
from src.domain.printing_request import PrintingRequest
from src.domain.wallet_transaction import TransactionType, WalletTransaction


def _use_case(session, retry_policy=None) -> SubmitPrintRequest:
    return SubmitPrintRequest(
        uow=SqlAlchemyUnitOfWork(session),
        wallet_repo=SqlAlchemyWalletRepository(session),
        printing_request_repo=SqlAlchemyPrintingRequestRepository(session),
        ledger=Ledger(SqlAlchemyWalletTransactionRepository(session)),
        pricing_table=PricingTable.with_defaults(),
        retry_policy=retry_policy or RetryPolicy(max_attempts=20, backoff_ms=10),
    )


def _job(student_id="2023001", pages=3, copies=2, paper_size="A4", print_type="Color"):
    return SubmitPrintRequestCommandDTO(
        student_id=student_id,
        file_name="thesis.pdf",
        file_type="pdf",
        num_pages=pages,
        num_copies=copies,
        paper_size=paper_size,
        print_type=print_type,
    )


async def _state(session_factory, student_id="2023001"):
    """Fresh view of wallet, requests and ledger for a student"""
    async with session_factory() as session:
        wallet = await SqlAlchemyWalletRepository(session).get_by_student_id(student_id)
        requests = (
            await session.execute(select(PrintingRequest).where(PrintingRequest.student_id == student_id))
        ).scalars().all()
        transactions = (
            await session.execute(
                select(WalletTransaction)
                .where(WalletTransaction.student_id == student_id)
                .order_by(WalletTransaction.id)
            )
        ).scalars().all()
        return wallet, list(requests), list(transactions)


@pytest.mark.asyncio
class TestSubmitPrintRequestIntegration:
    async def test_end_to_end_settlement(self, session_factory, open_account):
        """
        Given: A wallet funded with 10.00
        When: A4 Color, 3 pages x 2 copies is submitted
        Then: Balance drops to 7.00, a Pending request and a Print Payment entry are stored
        """
        await open_account(balance=Decimal("10.00"))

        async with session_factory() as session:
            result = await _use_case(session).execute(_job())

        assert result.is_ok()
        assert result.value.request.total_cost == Decimal("3.00")

        wallet, requests, transactions = await _state(session_factory)
        assert wallet.balance == Decimal("7.00")
        assert len(requests) == 1
        assert requests[0].total_cost == Decimal("3.00")

        payment = transactions[-1]
        assert payment.transaction_type == TransactionType.PRINT_PAYMENT
        assert payment.amount == Decimal("3.00")
        assert payment.balance_before == Decimal("10.00")
        assert payment.balance_after == Decimal("7.00")
        assert payment.printing_request_id == requests[0].id

    async def test_ledger_sum_matches_balance(self, session_factory, open_account):
        """Balance equals top-ups plus refunds minus payments after a mix of jobs"""
        await open_account(balance=Decimal("5.00"))

        async with session_factory() as session:
            for job in [_job(pages=1, copies=1), _job(pages=2, copies=1, print_type="Black & White"), _job(pages=4, copies=1)]:
                await _use_case(session).execute(job)

        wallet, _, transactions = await _state(session_factory)
        signed_sum = sum((t.signed_amount for t in transactions), Decimal("0.00"))
        assert wallet.balance == Decimal("2.30")
        assert signed_sum == wallet.balance

    async def test_insufficient_funds_changes_nothing(self, session_factory, open_account):
        await open_account(balance=Decimal("2.99"))

        async with session_factory() as session:
            result = await _use_case(session).execute(_job())

        assert result.is_err()
        assert result.error.code == ErrorCode.INSUFFICIENT_FUNDS

        wallet, requests, transactions = await _state(session_factory)
        assert wallet.balance == Decimal("2.99")
        assert requests == []
        assert len(transactions) == 1  # the funding top-up only

    async def test_insufficient_funds_reports_balance_read_before_rollback(self, session_factory, open_account):
        await open_account(balance=Decimal("1.00"))

        async with session_factory() as session:
            result = await _use_case(session).execute(_job())

        assert result.is_err()
        assert result.error.code == ErrorCode.INSUFFICIENT_FUNDS
        assert "Required: 3.00" in result.error.message
        assert "Available: 1.00" in result.error.message
        assert result.error.reason == "balance=1.00, required=3.00"

    async def test_failure_after_debit_rolls_everything_back(self, session_factory, open_account):
        """
        Given: The ledger append fails after the wallet was debited in-transaction
        When: Settlement runs
        Then: Neither the debit nor the request survive
        """
        await open_account(balance=Decimal("10.00"))

        async with session_factory() as session:
            with patch.object(Ledger, "append", side_effect=RuntimeError("ledger write failed")):
                result = await _use_case(session).execute(_job())

        assert result.is_err()
        assert result.error.code == ErrorCode.SETTLEMENT_FAILED

        wallet, requests, transactions = await _state(session_factory)
        assert wallet.balance == Decimal("10.00")
        assert requests == []
        assert [t.transaction_type for t in transactions] == [TransactionType.TOPUP]

    async def test_concurrent_debits_on_one_wallet(self, session_factory, open_account):
        """
        Given: Balance 100.00
        When: Two 80.00 jobs (A3 Color, 80 pages) settle at the same time on separate sessions
        Then: Exactly one succeeds, the other fails INSUFFICIENT_FUNDS, final balance 20.00
        """
        await open_account(balance=Decimal("100.00"))

        async def settle():
            async with session_factory() as session:
                return await _use_case(session).execute(_job(pages=80, copies=1, paper_size="A3"))

        results = await asyncio.gather(settle(), settle())

        succeeded = [r for r in results if r.is_ok()]
        failed = [r for r in results if r.is_err()]
        assert len(succeeded) == 1
        assert len(failed) == 1
        assert failed[0].error.code == ErrorCode.INSUFFICIENT_FUNDS

        wallet, requests, transactions = await _state(session_factory)
        assert wallet.balance == Decimal("20.00")
        assert len(requests) == 1
        assert sum((t.signed_amount for t in transactions), Decimal("0.00")) == Decimal("20.00")

    async def test_balance_never_negative_under_contention(self, session_factory, open_account):
        """Ten 1.00 jobs against 5.00: five settle, five are rejected"""
        await open_account(balance=Decimal("5.00"))

        async def settle():
            async with session_factory() as session:
                return await _use_case(session, RetryPolicy(max_attempts=50, backoff_ms=5)).execute(
                    _job(pages=10, copies=1, print_type="Black & White")
                )

        results = await asyncio.gather(*[settle() for _ in range(10)])

        assert sum(1 for r in results if r.is_ok()) == 5
        assert all(r.error.code == ErrorCode.INSUFFICIENT_FUNDS for r in results if r.is_err())

        wallet, _, _ = await _state(session_factory)
        assert wallet.balance == Decimal("0.00")
