"""Custom exceptions for the storefront."""
from __future__ import annotations


class StorefrontException(Exception):
    """Base exception for all storefront errors."""

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message


class ValidationException(StorefrontException):
    """Input validation errors."""

    pass


class StorageException(StorefrontException):
    """Persistent storage read/write errors."""

    def __init__(self, key: str, reason: Exception | str) -> None:
        super().__init__(f"Storage operation failed for key {key}: {reason}")
        self.key = key
        self.reason = reason


class SchemaVersionException(StorageException):
    """Persisted record written by a newer schema than this build understands."""

    def __init__(self, key: str, version: int, supported: int) -> None:
        super().__init__(key, f"record version {version} is newer than supported {supported}")
        self.version = version
        self.supported = supported


class ConfigurationException(StorefrontException):
    """Configuration errors."""

    pass
