"""Comment create/read/update/delete, scoped to the author."""

from __future__ import annotations

import logging

from ..backend import BackendAPIError
from ..models import Comment, parse_rows
from .base import ContextService
from .results import AuthRequired, BackendFailure, Failure, NotFound, Result, Success

_logger = logging.getLogger("services")

COMMENT_WITH_PROFILE = "*, profile:profiles(*)"


class CommentService(ContextService):
    """Comments on posts.

    Mutations match on (id, user_id), so a user can only change their own
    comments; a mismatch touches no row.
    """

    async def fetch(self, post_id: str) -> list[Comment]:
        """Comments of a post, oldest first. Errors yield an empty list."""
        try:
            response = await (
                self.backend.table("comments")
                .select(COMMENT_WITH_PROFILE)
                .eq("post_id", post_id)
                .order("created_at")
                .execute()
            )
        except BackendAPIError as e:
            _logger.error(f"Error fetching comments for {post_id}: {e}")
            return []

        return parse_rows(Comment, response.data)

    async def add(self, post_id: str, content: str) -> Result[Comment]:
        user = self.user
        if user is None:
            return AuthRequired("User not authenticated")

        content = content.strip()
        if not content:
            return Failure("Comment must not be empty")

        try:
            response = await (
                self.backend.table("comments")
                .insert({"user_id": user.id, "post_id": post_id, "content": content})
                .select(COMMENT_WITH_PROFILE)
                .single()
                .execute()
            )
        except BackendAPIError as e:
            _logger.error(f"Error adding comment: {e}")
            return BackendFailure(f"Failed to add comment: {e.message}", {"code": e.code})

        return Success(Comment.model_validate(response.data))

    async def update(self, comment_id: str, content: str) -> Result[Comment]:
        """Change the content of one of the user's comments."""
        user = self.user
        if user is None:
            return AuthRequired("User not authenticated")

        content = content.strip()
        if not content:
            return Failure("Comment must not be empty")

        try:
            response = await (
                self.backend.table("comments")
                .update({"content": content})
                .match({"id": comment_id, "user_id": user.id})
                .select(COMMENT_WITH_PROFILE)
                .single()
                .execute()
            )
        except BackendAPIError as e:
            if e.is_not_found:
                return NotFound(f"Comment not found: {comment_id}")
            _logger.error(f"Error updating comment: {e}")
            return BackendFailure(f"Failed to update comment: {e.message}", {"code": e.code})

        return Success(Comment.model_validate(response.data))

    async def delete(self, comment_id: str) -> Result[int]:
        """Delete one of the user's comments.

        Returns:
            Success with the number of rows deleted: 0 when the comment
            does not exist or belongs to someone else.
        """
        user = self.user
        if user is None:
            return AuthRequired("User not authenticated")

        try:
            response = await (
                self.backend.table("comments")
                .delete()
                .match({"id": comment_id, "user_id": user.id})
                .execute()
            )
        except BackendAPIError as e:
            _logger.error(f"Error deleting comment: {e}")
            return BackendFailure(f"Failed to delete comment: {e.message}", {"code": e.code})

        return Success(response.count)
