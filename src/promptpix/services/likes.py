"""Like toggling and like-status lookups."""

from __future__ import annotations

import logging

from ..backend import BackendAPIError
from .base import ContextService
from .results import AuthRequired, BackendFailure, Result, Success

_logger = logging.getLogger("services")


class LikeService(ContextService):
    """Likes of the signed-in user.

    Concurrent toggles from several sessions are not coordinated here;
    the backend's (user_id, post_id) uniqueness is the only guard.
    """

    async def toggle(self, post_id: str, currently_liked: bool) -> Result[bool]:
        """Unlike when liked, like otherwise. One backend call.

        Returns:
            Success with the new liked state, or a failure.
        """
        user = self.user
        if user is None:
            return AuthRequired("User not authenticated")

        match = {"user_id": user.id, "post_id": post_id}
        try:
            if currently_liked:
                await self.backend.table("likes").delete().match(match).execute()
            else:
                await self.backend.table("likes").insert(match).execute()
        except BackendAPIError as e:
            _logger.error(f"Error toggling like on {post_id}: {e}")
            return BackendFailure(f"Failed to update like: {e.message}", {"code": e.code})

        return Success(not currently_liked)

    async def check_like_status(self, post_id: str) -> bool:
        """Whether the signed-in user likes the post; False on any error."""
        user = self.user
        if user is None:
            return False

        try:
            response = await (
                self.backend.table("likes")
                .select("id")
                .match({"user_id": user.id, "post_id": post_id})
                .limit(1)
                .execute()
            )
        except BackendAPIError as e:
            _logger.error(f"Error checking like status: {e}")
            return False

        return bool(response.data)

    async def liked_post_ids(self, post_ids: list[str]) -> set[str]:
        """Subset of `post_ids` the signed-in user likes, in one query."""
        user = self.user
        if user is None or not post_ids:
            return set()

        try:
            response = await (
                self.backend.table("likes")
                .select("post_id")
                .eq("user_id", user.id)
                .in_("post_id", post_ids)
                .execute()
            )
        except BackendAPIError as e:
            _logger.error(f"Error fetching like status: {e}")
            return set()

        return {row["post_id"] for row in response.data}
