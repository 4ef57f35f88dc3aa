"""
Key management infrastructure for the key vault.

Provides the vault/wallet/account hierarchy, the storage contract and
encryption of stored secrets.
"""

from .storage import Storage
from .memory_storage import MemoryStorage
from .encryptor import Encryptor, FernetEncryptor
from .context import KeyVaultContext
from .account import ValidatorAccount
from .wallet import HDWallet
from .vault import KeyVault, new_key_vault, open_key_vault

__all__ = [
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
]
