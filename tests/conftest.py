import pytest
from unittest.mock import AsyncMock, MagicMock
from src.app.services.unit_of_work import UnitOfWork


@pytest.fixture
def mock_uow():
    """UnitOfWork double recording commit / rollback calls"""
    uow = MagicMock(spec=UnitOfWork)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=None)
    return uow
