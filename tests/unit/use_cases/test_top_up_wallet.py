"""Unit tests for TopUpWallet use case"""

import asyncio
import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.services.ledger import Ledger
from src.app.services.retry_policy import RetryPolicy
from src.app.use_cases.printshop import ErrorCode, TopUpCommandDTO, TopUpWallet
from src.domain.base import MAX_MONEY
from src.domain.exceptions import BalanceLimitExceeded
from src.domain.wallet import Wallet
from src.domain.wallet_transaction import TransactionType


@pytest.fixture
def mock_wallet_repo():
    return MagicMock()


@pytest.fixture
def mock_transaction_repo():
    repo = MagicMock()
    counter = {"id": 0}

    async def create(transaction):
        counter["id"] += 1
        transaction.id = counter["id"]
        return transaction

    repo.create = AsyncMock(side_effect=create)
    return repo


@pytest.fixture
def top_up_use_case(mock_uow, mock_wallet_repo, mock_transaction_repo):
    return TopUpWallet(
        uow=mock_uow,
        wallet_repo=mock_wallet_repo,
        ledger=Ledger(mock_transaction_repo),
        retry_policy=RetryPolicy(backoff_ms=0),
    )


@pytest.fixture
def sample_wallet():
    return Wallet(id=1, student_id="2023001", balance=Decimal("30.00"), version=2)


@pytest.mark.asyncio
class TestTopUpWallet:
    async def test_credits_wallet_and_records_topup(
        self, top_up_use_case, mock_wallet_repo, mock_transaction_repo, mock_uow, sample_wallet
    ):
        mock_wallet_repo.get_by_student_id = AsyncMock(return_value=sample_wallet)
        mock_wallet_repo.apply_delta = AsyncMock(return_value=Decimal("50.00"))

        result = await top_up_use_case.execute(
            TopUpCommandDTO(student_id="2023001", amount=Decimal("20.00"))
        )

        assert result.is_ok()
        response = result.value
        assert response.transaction_type == "Topup"
        assert response.amount == Decimal("20.00")
        assert response.balance_before == Decimal("30.00")
        assert response.balance_after == Decimal("50.00")
        assert response.status == "Success"
        assert response.reference_no.startswith("TOP")

        args, kwargs = mock_wallet_repo.apply_delta.call_args
        assert args == (1, Decimal("20.00"))
        assert kwargs["expected_version"] == 2
        assert isinstance(kwargs["topped_up_at"], datetime)
        assert kwargs["topped_up_at"].tzinfo is not None

        entry = mock_transaction_repo.create.call_args[0][0]
        assert entry.transaction_type == TransactionType.TOPUP
        mock_uow.commit.assert_called_once()

    @pytest.mark.parametrize("amount", ["0", "-5.00", "10.001", "100000000.00", "12345678901234567.89"])
    async def test_invalid_amount_rejected(
        self, top_up_use_case, mock_wallet_repo, mock_uow, amount
    ):
        mock_wallet_repo.get_by_student_id = AsyncMock()

        result = await top_up_use_case.execute(
            TopUpCommandDTO(student_id="2023001", amount=Decimal(amount))
        )

        assert result.is_err()
        assert result.error.code == ErrorCode.INVALID_AMOUNT
        mock_wallet_repo.get_by_student_id.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_resulting_balance_over_limit_rejected(
        self, top_up_use_case, mock_wallet_repo, mock_transaction_repo, mock_uow, sample_wallet
    ):
        mock_wallet_repo.get_by_student_id = AsyncMock(return_value=sample_wallet)
        mock_wallet_repo.apply_delta = AsyncMock(
            side_effect=BalanceLimitExceeded(1, Decimal("99999999.00"), Decimal("5.00"), MAX_MONEY)
        )

        result = await top_up_use_case.execute(
            TopUpCommandDTO(student_id="2023001", amount=Decimal("5.00"))
        )

        assert result.is_err()
        assert result.error.code == ErrorCode.INVALID_AMOUNT
        mock_transaction_repo.create.assert_not_called()
        mock_uow.rollback.assert_called()
        mock_uow.commit.assert_not_called()

    async def test_missing_wallet(self, top_up_use_case, mock_wallet_repo, mock_uow):
        mock_wallet_repo.get_by_student_id = AsyncMock(return_value=None)

        result = await top_up_use_case.execute(
            TopUpCommandDTO(student_id="ghost", amount=Decimal("5.00"))
        )

        assert result.is_err()
        assert result.error.code == ErrorCode.WALLET_NOT_FOUND
        mock_uow.commit.assert_not_called()

    async def test_concurrent_top_ups_get_distinct_references(
        self, top_up_use_case, mock_wallet_repo, sample_wallet
    ):
        """1,000 top-ups issued together never share a reference number"""
        mock_wallet_repo.get_by_student_id = AsyncMock(return_value=sample_wallet)
        mock_wallet_repo.apply_delta = AsyncMock(return_value=Decimal("31.00"))

        results = await asyncio.gather(
            *[
                top_up_use_case.execute(TopUpCommandDTO(student_id="2023001", amount=Decimal("1.00")))
                for _ in range(1000)
            ]
        )

        assert all(result.is_ok() for result in results)
        references = {result.value.reference_no for result in results}
        assert len(references) == 1000
