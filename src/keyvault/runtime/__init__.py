"""Runtime helpers for the key vault"""

from .errors import (
    ErrorCode,
    KeyVaultError,
    InvalidSeedError,
    InvalidPathError,
    InvalidKeyError,
    MalformedRecordError,
    NotFoundError,
    DuplicateNameError,
    StorageError,
    EncryptionError,
    ConfigurationError,
)

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
