"""Domain records mirrored from the relational store."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .constants import ImageQuality, ImageSize, ImageStyle

AVATAR_PLACEHOLDER_URL = "https://ui-avatars.com/api/?name={username}"


class Record(BaseModel):
    """Base for rows returned by the backend.

    Unknown columns are ignored so schema additions on the backend
    do not break the client.
    """

    model_config = ConfigDict(extra="ignore", use_enum_values=True)


class Profile(Record):
    """Public profile, one per authenticated identity."""

    id: str
    username: str
    avatar_url: str | None = None
    bio: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def avatar_or_placeholder(self) -> str:
        """Avatar URL, or a generated initials avatar when none is set."""
        return self.avatar_url or AVATAR_PLACEHOLDER_URL.format(username=self.username)


class Comment(Record):
    """Comment on a post; only its author may edit or delete it."""

    id: str
    user_id: str
    post_id: str
    content: str
    created_at: datetime
    updated_at: datetime
    profile: Profile | None = None


class Post(Record):
    """A published image with its prompt.

    likes_count and comments_count are maintained by the backend.
    """

    id: str
    user_id: str
    image_url: str
    prompt: str
    caption: str | None = None
    likes_count: int = 0
    comments_count: int = 0
    created_at: datetime
    updated_at: datetime

    # Hydrated fields
    profile: Profile | None = None
    user_has_liked: bool | None = None
    comments: list[Comment] | None = None


class Like(Record):
    """At most one per (user_id, post_id), enforced by the backend."""

    id: str
    user_id: str
    post_id: str
    created_at: datetime


class GenerationOptions(BaseModel):
    """Image generation options offered to the user."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    size: ImageSize = ImageSize.SQUARE
    quality: ImageQuality = ImageQuality.STANDARD
    style: ImageStyle = ImageStyle.VIVID


class HomeStats(BaseModel):
    """Aggregates shown on the home dashboard."""

    total_posts: int = 0
    total_likes: int = 0
    total_comments: int = 0
    recent_posts: int = 0


class HomeDashboard(BaseModel):
    """Profile, recent creations and stats for the signed-in user."""

    profile: Profile
    posts: list[Post] = Field(default_factory=list)
    stats: HomeStats = Field(default_factory=HomeStats)


def parse_rows(model: type[Record], rows: list[dict[str, Any]] | None) -> list[Any]:
    """Validate a list of backend rows into model instances."""
    return [model.model_validate(row) for row in rows or []]
