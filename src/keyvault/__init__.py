"""
KeyVault - hierarchical key management for validator signing keys

Derives a deterministic tree of BLS keys from a single seed and organizes it
as vault -> wallet -> account, persisted through a pluggable storage contract.
"""

from .runtime.errors import *
from .crypto import (
    BLSPrivateKey, BLSPublicKey,
    HDKey, master_key_from_seed, BASE_PATH,
)
from .keys import (
    Storage, MemoryStorage,
    Encryptor, FernetEncryptor,
    KeyVaultContext, ValidatorAccount, HDWallet,
    KeyVault, new_key_vault, open_key_vault,
)
from .options import KeyVaultOptions

__version__ = "0.1.0"
__all__ = [
    # Errors
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

    # Keys
    "BLSPrivateKey",
    "BLSPublicKey",
    "HDKey",
    "master_key_from_seed",
    "BASE_PATH",

    # Vault hierarchy
    "Storage",
    "MemoryStorage",
    "Encryptor",
    "FernetEncryptor",
    "KeyVaultContext",
    "ValidatorAccount",
    "HDWallet",
    "KeyVault",
    "new_key_vault",
    "open_key_vault",

    # Bootstrap
    "KeyVaultOptions",
]
