import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoicing.dtos import ActorDTO


@pytest.fixture
def mock_uow():
    """Unit of work mock with async commit/rollback, savepoint and context manager support"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=None)
    # Savepoint mock lets exceptions raised inside it propagate
    uow.savepoint.return_value.__aenter__ = AsyncMock(return_value=None)
    uow.savepoint.return_value.__aexit__ = AsyncMock(return_value=False)
    return uow


@pytest.fixture
def actor():
    return ActorDTO(user_id="user_1", org_id="org_acme", name="Grace Hopper")
