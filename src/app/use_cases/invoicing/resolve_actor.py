"""ResolveActor Use Case

Maps an authenticated user to the organization (tenant) all invoice
operations are scoped to.
"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.directory_repository import DirectoryRepository
from .dtos import ActorDTO


class ResolveActor:
    """
    Use Case: Resolve the acting user's tenant

    Errors:
        NOT_AUTHENTICATED: no user identity (no session / invalid token)
        PROFILE_NOT_FOUND: the user has no profile, hence no tenant
    """

    def __init__(self, directory_repo: DirectoryRepository):
        self.directory_repo = directory_repo

    async def execute(self, user_id: Optional[str]) -> Result[ActorDTO]:
        if not user_id:
            return Return.err(
                Error(
                    code="NOT_AUTHENTICATED",
                    message="Not authenticated",
                    reason="No active session",
                )
            )

        profile = await self.directory_repo.get_profile(user_id)
        if not profile:
            return Return.err(
                Error(
                    code="PROFILE_NOT_FOUND",
                    message=f"No profile found for user {user_id}",
                    reason="User is not a member of any organization",
                )
            )

        return Return.ok(
            ActorDTO(
                user_id=profile.user_id,
                org_id=profile.org_id,
                name=profile.full_name,
            )
        )
