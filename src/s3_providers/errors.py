"""Exception hierarchy for the S3 providers."""

from __future__ import annotations

from typing import Any, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

NOT_FOUND_CODES = ("404", "NoSuchKey", "NotFound")


class S3ProviderError(Exception):
    """Base exception for all provider errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(S3ProviderError):
    """Raised when a provider is constructed with missing or invalid options."""
    pass


class InvalidPathError(S3ProviderError, ValueError):
    """Raised when a path cannot be turned into a usable object key."""
    pass


class PathTraversalError(InvalidPathError):
    """Raised when a path climbs above the bucket root."""
    pass


class NotFoundError(S3ProviderError):
    """Raised when a key is absent where presence is required."""
    pass


class AlreadyExistsError(S3ProviderError):
    """Raised when a copy destination exists and overwrite is disabled."""
    pass


class UnsupportedOperationError(S3ProviderError, NotImplementedError):
    """Raised for filesystem operations that have no object-store mapping."""
    pass


class StoreError(S3ProviderError):
    """Raised when the S3 client fails (network, permissions, throttling)."""
    pass


def is_not_found(error: ClientError) -> bool:
    """Return True when a botocore ClientError means the key does not exist."""
    code = error.response.get("Error", {}).get("Code")
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return code in NOT_FOUND_CODES or status == 404


def translate_client_error(error: Exception, bucket: str, key: str) -> S3ProviderError:
    """Map a botocore exception onto the provider error taxonomy."""
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "Unknown")
        details = {"bucket": bucket, "key": key, "code": code}
        if is_not_found(error):
            return NotFoundError(f"Path not found: {key}", details)
        return StoreError(f"S3 request failed for s3://{bucket}/{key}: {error}", details)
    if isinstance(error, BotoCoreError):
        return StoreError(
            f"S3 client error for s3://{bucket}/{key}: {error}",
            {"bucket": bucket, "key": key},
        )
    return StoreError(str(error), {"bucket": bucket, "key": key})
