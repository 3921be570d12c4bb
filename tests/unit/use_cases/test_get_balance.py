"""Unit tests for GetBalance use case"""

import pytest
from datetime import datetime, timezone
from src.domain.base import utc_now
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.printshop import ErrorCode, GetBalance
from src.domain.student import Student
from src.domain.wallet import Wallet


@pytest.fixture
def mock_wallet_repo():
    return MagicMock()


@pytest.fixture
def mock_student_repo():
    return MagicMock()


@pytest.mark.asyncio
class TestGetBalance:
    async def test_returns_balance_with_student_identity(self, mock_wallet_repo, mock_student_repo):
        topped_up = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        mock_wallet_repo.get_by_student_id = AsyncMock(
            return_value=Wallet(
                id=1,
                student_id="2023001",
                balance=Decimal("47.00"),
                last_topup_at=topped_up,
                updated_at=utc_now(),
            )
        )
        mock_student_repo.get_by_id = AsyncMock(
            return_value=Student(student_id="2023001", full_name="John Doe", department="Computer Science")
        )

        result = await GetBalance(mock_wallet_repo, mock_student_repo).execute("2023001")

        assert result.is_ok()
        assert result.value.wallet_id == 1
        assert result.value.balance == Decimal("47.00")
        assert result.value.full_name == "John Doe"
        assert result.value.department == "Computer Science"
        assert result.value.last_topup_at == topped_up
        mock_wallet_repo.get_by_student_id.assert_called_once_with("2023001")

    async def test_wallet_not_found(self, mock_wallet_repo, mock_student_repo):
        mock_wallet_repo.get_by_student_id = AsyncMock(return_value=None)
        mock_student_repo.get_by_id = AsyncMock()

        result = await GetBalance(mock_wallet_repo, mock_student_repo).execute("ghost")

        assert result.is_err()
        assert result.error.code == ErrorCode.WALLET_NOT_FOUND
        mock_student_repo.get_by_id.assert_not_called()
