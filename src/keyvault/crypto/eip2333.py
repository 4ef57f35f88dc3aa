r"""
EIP-2333 hierarchical key derivation for BLS12-381.

Implements the seed -> master secret key and parent -> child secret key
functions used to build the validator key tree. Child derivation goes through
a Lamport-style compression of the parent key, so every derivation step is
hardened: a child cannot be computed from public material alone.

Reference: https://eips.ethereum.org/EIPS/eip-2333
"""

from __future__ import annotations
import hashlib
from typing import List

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from .bls import CURVE_ORDER

# Output length of HKDF_mod_r, ceil((3 * ceil(log2(r))) / 16)
HKDF_MOD_R_LENGTH = 48
KEYGEN_SALT = b"BLS-SIG-KEYGEN-SALT-"
LAMPORT_CHUNKS = 255
LAMPORT_CHUNK_SIZE = 32
MAX_INDEX = 2 ** 32 - 1


def _sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def _hkdf(ikm: bytes, salt: bytes, info: bytes, length: int) -> bytes:
    """HKDF-Extract followed by HKDF-Expand over SHA-256."""
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=length,
        salt=salt,
        info=info,
        backend=default_backend(),
    )
    return hkdf.derive(ikm)


def hkdf_mod_r(ikm: bytes) -> int:
    """
    Derive a scalar of the BLS12-381 group from input key material.

    This is the KeyGen of the first EIP-2333 revision: a single HKDF pass
    with the fixed key generation salt and empty info, reduced modulo r.
    Later revisions re-hash the salt, append a zero byte to the input and
    set info to I2OSP(L, 2); those produce different keys.

    Args:
        ikm: Input key material

    Returns:
        Secret scalar in [0, r)
    """
    okm = _hkdf(ikm, KEYGEN_SALT, b"", HKDF_MOD_R_LENGTH)
    return int.from_bytes(okm, "big") % CURVE_ORDER


def _ikm_to_lamport_sk(ikm: bytes, salt: bytes) -> List[bytes]:
    okm = _hkdf(ikm, salt, b"", LAMPORT_CHUNKS * LAMPORT_CHUNK_SIZE)
    return [
        okm[i * LAMPORT_CHUNK_SIZE:(i + 1) * LAMPORT_CHUNK_SIZE]
        for i in range(LAMPORT_CHUNKS)
    ]


def _parent_sk_to_lamport_pk(parent_sk: int, index: int) -> bytes:
    salt = index.to_bytes(4, "big")
    ikm = parent_sk.to_bytes(32, "big")
    lamport_0 = _ikm_to_lamport_sk(ikm, salt)
    not_ikm = bytes(b ^ 0xFF for b in ikm)
    lamport_1 = _ikm_to_lamport_sk(not_ikm, salt)
    lamport_pk = b"".join(_sha256(chunk) for chunk in lamport_0 + lamport_1)
    return _sha256(lamport_pk)


def derive_master_sk(seed: bytes) -> int:
    """
    Derive the master secret key from a seed.

    Args:
        seed: Root secret bytes (non-empty)

    Returns:
        Master secret scalar

    Raises:
        ValueError: If the seed is empty
    """
    if not seed:
        raise ValueError("seed can't be empty")
    return hkdf_mod_r(bytes(seed))


def derive_child_sk(parent_sk: int, index: int) -> int:
    """
    Derive a hardened child secret key.

    Args:
        parent_sk: Parent secret scalar
        index: Child index, 0 <= index < 2**32

    Returns:
        Child secret scalar
    """
    if not 0 <= index <= MAX_INDEX:
        raise ValueError(f"child index out of range: {index}")
    compressed_lamport_pk = _parent_sk_to_lamport_pk(parent_sk, index)
    return hkdf_mod_r(compressed_lamport_pk)


__all__ = [
    "hkdf_mod_r",
    "derive_master_sk",
    "derive_child_sk",
]
