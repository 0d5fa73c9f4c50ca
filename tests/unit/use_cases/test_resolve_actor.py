"""Unit tests for ResolveActor use case"""

from unittest.mock import AsyncMock

import pytest

from src.app.use_cases.invoicing.resolve_actor import ResolveActor


@pytest.mark.asyncio
class TestResolveActor:

    async def test_resolves_profile_to_organization(self, mock_directory_repo):
        # Act
        result = await ResolveActor(mock_directory_repo).execute("user_1")

        # Assert
        assert result.is_ok()
        assert result.value.user_id == "user_1"
        assert result.value.org_id == "org_acme"
        assert result.value.name == "Grace Hopper"

    @pytest.mark.parametrize("user_id", [None, ""])
    async def test_no_session(self, mock_directory_repo, user_id):
        # Act
        result = await ResolveActor(mock_directory_repo).execute(user_id)

        # Assert
        assert result.is_err()
        assert result.error.code == "NOT_AUTHENTICATED"
        mock_directory_repo.get_profile.assert_not_called()

    async def test_user_without_profile(self, mock_directory_repo):
        # Arrange
        mock_directory_repo.get_profile = AsyncMock(return_value=None)

        # Act
        result = await ResolveActor(mock_directory_repo).execute("user_ghost")

        # Assert
        assert result.is_err()
        assert result.error.code == "PROFILE_NOT_FOUND"
