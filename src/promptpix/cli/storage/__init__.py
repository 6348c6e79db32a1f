"""Storage feature - bucket diagnostic commands."""

from .commands import storage_check, storage_create, storage_test

__all__ = ["storage_check", "storage_create", "storage_test"]
