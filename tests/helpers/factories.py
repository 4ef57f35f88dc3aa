"""
Test factories for creating test data consistently.

Provides seeds and vault builders shared across test modules.
"""

from __future__ import annotations
import hashlib
from typing import Optional, Union

from keyvault import KeyVaultOptions, MemoryStorage, Storage, new_key_vault

# 0x01..0x1f followed by 0xff
TEST_SEED_HEX = "0102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1fff"


def byte_array(hex_string: str) -> bytes:
    """Decode a hex string to bytes."""
    return bytes.fromhex(hex_string)


def mk_seed(seed: Union[int, bytes, None] = None) -> bytes:
    """
    Create a deterministic 32-byte seed for testing.

    Args:
        seed: Optional int or bytes to derive the seed from

    Returns:
        32-byte seed (the canonical test seed when omitted)
    """
    if seed is None:
        return byte_array(TEST_SEED_HEX)
    if isinstance(seed, int):
        return seed.to_bytes(32, 'big')
    return hashlib.sha256(seed).digest()


def mk_vault(storage: Optional[Storage] = None, seed: Optional[bytes] = None):
    """Create a vault over the given (or a fresh in-memory) storage."""
    options = KeyVaultOptions()
    options.set_storage(storage or MemoryStorage())
    options.set_seed(seed or mk_seed())
    return new_key_vault(options)
