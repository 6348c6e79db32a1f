"""Result type and the failure taxonomy returned by services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure:
    """Failed result containing an error message."""

    error: str
    details: dict[str, Any] | None = None

    stage: ClassVar[str] = "error"

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True


# Result type - either Success[T] or Failure
Result = Union[Success[T], Failure]


@dataclass(frozen=True)
class AuthRequired(Failure):
    """No signed-in user."""

    stage: ClassVar[str] = "auth_required"


@dataclass(frozen=True)
class ConfigurationError(Failure):
    """Missing API key or backend settings."""

    stage: ClassVar[str] = "configuration"


@dataclass(frozen=True)
class ProfileInitFailure(Failure):
    """The caller's profile could not be read or created."""

    stage: ClassVar[str] = "profile_init"


@dataclass(frozen=True)
class StorageUnavailable(Failure):
    """The image bucket is missing or cannot be listed."""

    stage: ClassVar[str] = "storage_unavailable"


@dataclass(frozen=True)
class DecodeFailure(Failure):
    """The generated payload is not valid base64."""

    stage: ClassVar[str] = "decode"


@dataclass(frozen=True)
class UploadFailure(Failure):
    """Writing the image to the blob store failed."""

    stage: ClassVar[str] = "upload"


@dataclass(frozen=True)
class PersistFailure(Failure):
    """Inserting the post row failed."""

    stage: ClassVar[str] = "persist"


@dataclass(frozen=True)
class GenerationFailure(Failure):
    """The image API call failed."""

    stage: ClassVar[str] = "generation"

    @property
    def reason(self) -> str:
        return self.error


@dataclass(frozen=True)
class NotFound(Failure):
    """A single-row lookup matched nothing."""

    stage: ClassVar[str] = "not_found"


@dataclass(frozen=True)
class BackendFailure(Failure):
    """Any other backend error on a CRUD path."""

    stage: ClassVar[str] = "backend"
