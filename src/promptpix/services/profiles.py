"""Profile lookup and lazy creation."""

from __future__ import annotations

import logging

from ..backend import AuthUser, BackendAPIError
from ..constants import USER_ID_PREFIX_LENGTH
from ..models import Profile
from .base import ContextService
from .results import AuthRequired, BackendFailure, NotFound, ProfileInitFailure, Result, Success

_logger = logging.getLogger("services")


def default_username(user: AuthUser) -> str:
    """Email local part, or `user_<id prefix>` when there is no usable email."""
    if user.email:
        local_part = user.email.split("@")[0]
        if local_part:
            return local_part
    return f"user_{user.id[:USER_ID_PREFIX_LENGTH]}"


class ProfileService(ContextService):
    """Read and lazily create the profile row of an identity."""

    async def get_profile(self, user_id: str | None = None) -> Result[Profile]:
        """Fetch one profile; defaults to the signed-in user's."""
        if user_id is None:
            if self.user is None:
                return AuthRequired("User not authenticated")
            user_id = self.user.id

        try:
            response = await self.backend.table("profiles").select("*").eq("id", user_id).single().execute()
        except BackendAPIError as e:
            if e.is_not_found:
                return NotFound(f"Profile not found: {user_id}")
            _logger.error(f"Error fetching profile {user_id}: {e}")
            return BackendFailure(f"Failed to fetch profile: {e.message}", {"code": e.code})

        return Success(Profile.model_validate(response.data))

    async def ensure_profile(self) -> Result[Profile | None]:
        """Make sure the signed-in user has a profile row.

        Returns:
            Success with the existing profile, or with None right after
            creating one; ProfileInitFailure when either call fails.
        """
        user = self.user
        if user is None:
            return AuthRequired("User not authenticated")

        try:
            response = await self.backend.table("profiles").select("*").eq("id", user.id).single().execute()
            return Success(Profile.model_validate(response.data))
        except BackendAPIError as e:
            if not e.is_not_found:
                _logger.error(f"Profile fetch error: {e}")
                return ProfileInitFailure(f"Failed to fetch profile: {e.message}", {"code": e.code})

        username = default_username(user)
        _logger.info(f"Creating profile for {user.id} as {username}")
        try:
            await self.backend.table("profiles").insert({"id": user.id, "username": username}).execute()
        except BackendAPIError as e:
            _logger.error(f"Profile create error: {e}")
            return ProfileInitFailure(f"Failed to create profile: {e.message}", {"code": e.code})

        return Success(None)
