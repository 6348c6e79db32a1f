"""Read-only feeds: news, global, per-profile and the home dashboard."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from ..backend import BackendAPIError
from ..constants import HOME_RECENT_POSTS_LIMIT, NEWS_FEED_LIMIT, RECENT_POSTS_WINDOW_DAYS
from ..models import HomeDashboard, HomeStats, Post, Profile, parse_rows
from ..session import AppContext
from .base import ContextService
from .likes import LikeService
from .profiles import ProfileService
from .results import AuthRequired, BackendFailure, Failure, NotFound, Result, Success

_logger = logging.getLogger("services")

POST_WITH_PROFILE = "*, profile:profiles(*)"


def compute_home_stats(posts: list[Post], now: datetime | None = None) -> HomeStats:
    """Totals over `posts`; recent means created within the last week."""
    if now is None:
        now = datetime.now(timezone.utc)
    cutoff = now - timedelta(days=RECENT_POSTS_WINDOW_DAYS)

    recent = 0
    for post in posts:
        created_at = post.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        if created_at > cutoff:
            recent += 1

    return HomeStats(
        total_posts=len(posts),
        total_likes=sum(post.likes_count or 0 for post in posts),
        total_comments=sum(post.comments_count or 0 for post in posts),
        recent_posts=recent,
    )


class FeedService(ContextService):
    """Feed queries. No cursor pagination, only limits.

    Read failures are logged and produce an empty list.
    """

    def __init__(self, ctx: AppContext, likes: LikeService | None = None, profiles: ProfileService | None = None):
        super().__init__(ctx)
        self.likes = likes or LikeService(ctx)
        self.profiles = profiles or ProfileService(ctx)

    async def _query_posts(
        self,
        user_id: str | None = None,
        limit: int | None = None,
        with_like_status: bool = False,
    ) -> list[Post]:
        query = self.backend.table("posts").select(POST_WITH_PROFILE)
        if user_id is not None:
            query = query.eq("user_id", user_id)
        query = query.order("created_at", desc=True)
        if limit is not None:
            query = query.limit(limit)

        try:
            response = await query.execute()
        except BackendAPIError as e:
            _logger.error(f"Error fetching posts: {e}")
            return []

        posts: list[Post] = parse_rows(Post, response.data)
        if with_like_status and posts:
            liked = await self.likes.liked_post_ids([post.id for post in posts])
            for post in posts:
                post.user_has_liked = post.id in liked
        return posts

    async def news_feed(self, limit: int = NEWS_FEED_LIMIT, with_like_status: bool = False) -> list[Post]:
        """Newest posts from everyone."""
        return await self._query_posts(limit=limit, with_like_status=with_like_status)

    async def global_feed(self, limit: int, with_like_status: bool = False) -> list[Post]:
        return await self._query_posts(limit=limit, with_like_status=with_like_status)

    async def profile_feed(self, user_id: str | None = None, with_like_status: bool = False) -> list[Post]:
        """All posts of one user, newest first; defaults to the signed-in user."""
        if user_id is None:
            if self.user is None:
                return []
            user_id = self.user.id
        return await self._query_posts(user_id=user_id, with_like_status=with_like_status)

    async def get_profile(self, user_id: str | None = None) -> Result[Profile]:
        return await self.profiles.get_profile(user_id)

    async def get_post(self, post_id: str) -> Result[Post]:
        """One post with its author's profile."""
        try:
            response = await (
                self.backend.table("posts")
                .select(POST_WITH_PROFILE)
                .eq("id", post_id)
                .single()
                .execute()
            )
        except BackendAPIError as e:
            if e.is_not_found:
                return NotFound(f"Post not found: {post_id}")
            _logger.error(f"Error fetching post {post_id}: {e}")
            return BackendFailure(f"Failed to fetch post: {e.message}", {"code": e.code})

        return Success(Post.model_validate(response.data))

    async def home(self, now: datetime | None = None) -> Result[HomeDashboard]:
        """Profile, six most recent creations and stats over them."""
        if self.user is None:
            return AuthRequired("User not authenticated")

        profile = await self.profiles.get_profile()
        if isinstance(profile, Failure):
            return profile

        posts = await self._query_posts(user_id=self.user.id, limit=HOME_RECENT_POSTS_LIMIT)
        return Success(HomeDashboard(
            profile=profile.value,
            posts=posts,
            stats=compute_home_stats(posts, now),
        ))
