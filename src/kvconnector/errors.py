"""
kvconnector - Core Error Types

Defines the exception hierarchy for the connector.
All exceptions inherit from KVConnectorError for consistent error handling.
"""

from typing import Any


class KVConnectorError(Exception):
    """Base exception for all kvconnector errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured reporting."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(KVConnectorError):
    """Raised when configuration is invalid or missing."""


class CacheError(KVConnectorError):
    """Base exception for cache-related errors."""


class NotFoundError(CacheError):
    """Raised when a key is absent from the store."""

    def __init__(self, key: str, details: dict[str, Any] | None = None):
        message = f"No such entity: {key}"
        error_details = {"key": key}
        error_details.update(details or {})
        super().__init__(message, error_details)
        self.key = key


class DecodeError(CacheError):
    """
    Raised when the caller-supplied decode function fails.

    The original exception is available as ``cause`` and is also chained
    as ``__cause__`` by the raising site.
    """

    def __init__(self, key: str, cause: BaseException):
        message = f"Error while decoding value for key '{key}': {cause}"
        super().__init__(message, {"key": key, "cause": type(cause).__name__})
        self.key = key
        self.cause = cause


class CacheConnectionError(CacheError, ConnectionError):
    """Raised when the store cannot be reached or a transport call fails."""

    def __init__(self, operation: str, address: str, details: dict[str, Any] | None = None):
        message = f"Cache store at {address} failed during {operation}"
        error_details = {"operation": operation, "address": address}
        error_details.update(details or {})
        super().__init__(message, error_details)
        self.operation = operation
        self.address = address
