"""
Cryptographic primitives for the key vault.

Provides BLS12-381 keys and EIP-2333 hierarchical derivation.
"""

from .bls import BLSPrivateKey, BLSPublicKey, CURVE_ORDER
from .eip2333 import derive_master_sk, derive_child_sk, hkdf_mod_r
from .hd_key import HDKey, master_key_from_seed, BASE_PATH

__all__ = [
    "BLSPrivateKey",
    "BLSPublicKey",
    "CURVE_ORDER",
    "derive_master_sk",
    "derive_child_sk",
    "hkdf_mod_r",
    "HDKey",
    "master_key_from_seed",
    "BASE_PATH",
]
