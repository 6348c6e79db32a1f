"""Feed feature - home, news, profile, like and comment commands."""

from .commands import (
    comment,
    comments,
    delete_comment,
    download,
    edit_comment,
    home,
    like,
    news,
    profile,
    unlike,
)

__all__ = [
    "comment",
    "comments",
    "delete_comment",
    "download",
    "edit_comment",
    "home",
    "like",
    "news",
    "profile",
    "unlike",
]
