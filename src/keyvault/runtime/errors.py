"""
KeyVault Error Model

This module provides the error handling framework for the key vault:
a small set of error codes and one exception class per failure category.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """KeyVault error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    NOT_FOUND = 4
    CONFLICT = 6
    INVALID_CONFIGURATION = 7

    # Key derivation errors (100-199)
    INVALID_SEED = 100
    INVALID_PATH = 101
    INVALID_KEY = 102

    # Encoding errors (200-299)
    MALFORMED_RECORD = 200

    # Storage errors (300-399)
    STORAGE_FAILURE = 300
    ENCRYPTION_FAILURE = 301


class KeyVaultError(Exception):
    """
    Base class for all key vault errors.

    Carries a code, optional structured details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a key vault error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KeyVaultError':
        """Create error from dictionary representation."""
        code = ErrorCode(data.get("code", ErrorCode.UNKNOWN))
        message = data.get("message", "Unknown error")
        details = data.get("details")
        return cls(message, code, details)


class InvalidSeedError(KeyVaultError):
    """Empty or malformed root secret."""

    def __init__(self, message: str = "seed can't be empty",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_SEED, details, cause)


class InvalidPathError(KeyVaultError):
    """Relative derivation path does not match the path grammar."""

    def __init__(self, message: str = "invalid relative path. Example: /1/2/3",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_PATH, details, cause)


class InvalidKeyError(KeyVaultError):
    """Private or public key bytes do not describe a valid key."""

    def __init__(self, message: str = "Invalid key",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_KEY, details, cause)


class MalformedRecordError(KeyVaultError):
    """Persisted record is missing a required field or mis-types one."""

    def __init__(self, message: str = "Malformed record",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MALFORMED_RECORD, details, cause)


class NotFoundError(KeyVaultError):
    """Name or id has no corresponding persisted object."""

    def __init__(self, message: str = "Not found",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NOT_FOUND, details, cause)


class DuplicateNameError(KeyVaultError):
    """Name is already registered in its parent container."""

    def __init__(self, message: str = "Name already exists",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.CONFLICT, details, cause)


class StorageError(KeyVaultError):
    """Failure reported by a storage backend."""

    def __init__(self, message: str = "Storage failure",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.STORAGE_FAILURE, details, cause)


class EncryptionError(StorageError):
    """Secret material could not be encrypted or decrypted."""

    def __init__(self, message: str = "Encryption failure",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, details, cause)
        self.code = ErrorCode.ENCRYPTION_FAILURE


class ConfigurationError(KeyVaultError):
    """Vault options are incomplete or inconsistent."""

    def __init__(self, message: str = "Invalid configuration",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_CONFIGURATION, details, cause)


# Re-export key error types for convenience
__all__ = [
    "ErrorCode",
    "KeyVaultError",
    "InvalidSeedError",
    "InvalidPathError",
    "InvalidKeyError",
    "MalformedRecordError",
    "NotFoundError",
    "DuplicateNameError",
    "StorageError",
    "EncryptionError",
    "ConfigurationError",
]
