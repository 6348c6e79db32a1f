"""Backend-as-a-service clients - auth, relational store and blob storage."""

from .auth import AuthClient, AuthEvent, AuthUser, Session, Subscription
from .client import BackendClient
from .database import QueryResponse, TableQuery
from .http import NO_ROWS_CODE, BackendAPIError, BackendHTTP
from .storage import Bucket, StorageClient

__all__ = [
    "BackendClient",
    "BackendHTTP",
    "BackendAPIError",
    "NO_ROWS_CODE",
    "AuthClient",
    "AuthEvent",
    "AuthUser",
    "Session",
    "Subscription",
    "TableQuery",
    "QueryResponse",
    "StorageClient",
    "Bucket",
]
