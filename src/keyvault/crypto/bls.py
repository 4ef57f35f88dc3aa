r"""
BLS12-381 key operations for the key vault.

Provides BLS private/public key value types used by validator accounts.
Curve arithmetic and the proof-of-possession ciphersuite come from py_ecc.
"""

from __future__ import annotations
from typing import Union

from py_ecc.bls import G2ProofOfPossession as bls_pop
from py_ecc.optimized_bls12_381 import curve_order

from ..runtime.errors import InvalidKeyError

# Order of the BLS12-381 scalar field
CURVE_ORDER = curve_order

PRIVATE_KEY_LENGTH = 32
PUBLIC_KEY_LENGTH = 48
SIGNATURE_LENGTH = 96


class BLSPublicKey:
    """
    BLS12-381 public key (compressed G1 point).

    Provides verification operations and serialization.
    """

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize from 48-byte compressed public key.

        Args:
            public_key_bytes: 48-byte compressed G1 point

        Raises:
            InvalidKeyError: If key is invalid
        """
        if len(public_key_bytes) != PUBLIC_KEY_LENGTH:
            raise InvalidKeyError(
                f"BLS public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(public_key_bytes)}"
            )
        self._key_bytes = bytes(public_key_bytes)

    @classmethod
    def from_hex(cls, hex_string: str) -> BLSPublicKey:
        """Create public key from hex string."""
        try:
            key_bytes = bytes.fromhex(hex_string)
        except ValueError as e:
            raise InvalidKeyError(f"Invalid hex string: {e}", cause=e)
        return cls(key_bytes)

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> BLSPublicKey:
        """Create public key from bytes."""
        return cls(key_bytes)

    def to_bytes(self) -> bytes:
        """Get the 48-byte public key."""
        return self._key_bytes

    def to_hex(self) -> str:
        """Get the public key as hex string."""
        return self._key_bytes.hex()

    def verify(self, signature: bytes, message: bytes) -> bool:
        """
        Verify a signature against a message.

        Args:
            signature: 96-byte BLS signature
            message: Message that was signed

        Returns:
            True if signature is valid
        """
        if len(signature) != SIGNATURE_LENGTH:
            return False
        return bls_pop.Verify(self._key_bytes, message, signature)

    def __eq__(self, other) -> bool:
        """Check equality with another public key."""
        if not isinstance(other, BLSPublicKey):
            return False
        return self._key_bytes == other._key_bytes

    def __hash__(self) -> int:
        return hash(self._key_bytes)

    def __str__(self) -> str:
        return f"BLSPublicKey({self.to_hex()})"

    def __repr__(self) -> str:
        return f"BLSPublicKey.from_hex('{self.to_hex()}')"


class BLSPrivateKey:
    """
    BLS12-381 private key, a scalar in [1, r).

    The public key is projected lazily and cached.
    """

    def __init__(self, scalar: int):
        """
        Initialize from a scalar.

        Args:
            scalar: Secret scalar, 0 < scalar < CURVE_ORDER

        Raises:
            InvalidKeyError: If the scalar is out of range
        """
        if not 0 < scalar < CURVE_ORDER:
            raise InvalidKeyError("BLS private key scalar out of range")
        self._scalar = scalar
        self._public_key = None

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> BLSPrivateKey:
        """Create private key from 32-byte big-endian encoding."""
        if len(key_bytes) != PRIVATE_KEY_LENGTH:
            raise InvalidKeyError(
                f"BLS private key must be {PRIVATE_KEY_LENGTH} bytes, got {len(key_bytes)}"
            )
        return cls(int.from_bytes(key_bytes, "big"))

    @classmethod
    def from_hex(cls, hex_string: str) -> BLSPrivateKey:
        """Create private key from hex string."""
        try:
            key_bytes = bytes.fromhex(hex_string)
        except ValueError as e:
            raise InvalidKeyError(f"Invalid hex string: {e}", cause=e)
        return cls.from_bytes(key_bytes)

    def to_int(self) -> int:
        """Get the secret scalar."""
        return self._scalar

    def to_bytes(self) -> bytes:
        """Get the 32-byte big-endian private key."""
        return self._scalar.to_bytes(PRIVATE_KEY_LENGTH, "big")

    def to_hex(self) -> str:
        """Get the private key as hex string."""
        return self.to_bytes().hex()

    def public_key(self) -> BLSPublicKey:
        """Get the corresponding public key."""
        if self._public_key is None:
            self._public_key = BLSPublicKey(bls_pop.SkToPk(self._scalar))
        return self._public_key

    def sign(self, message: Union[bytes, bytearray]) -> bytes:
        """
        Sign a message.

        Args:
            message: Message to sign

        Returns:
            96-byte BLS signature
        """
        return bls_pop.Sign(self._scalar, bytes(message))

    def __eq__(self, other) -> bool:
        if not isinstance(other, BLSPrivateKey):
            return False
        return self._scalar == other._scalar

    def __hash__(self) -> int:
        return hash(self._scalar)

    def __str__(self) -> str:
        return f"BLSPrivateKey(public={self.public_key().to_hex()})"

    def __repr__(self) -> str:
        return "BLSPrivateKey(<redacted>)"


__all__ = [
    "CURVE_ORDER",
    "BLSPrivateKey",
    "BLSPublicKey",
]
