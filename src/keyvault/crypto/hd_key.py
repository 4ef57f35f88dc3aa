r"""
Hierarchical deterministic BLS keys.

An HDKey is a BLS private key tagged with the absolute path that produced it.
Master keys sit at the EIP-2334 base path m/12381/3600; every descendant is
reached through a relative path of up to three-digit indices.
"""

from __future__ import annotations
import logging
import re
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from .bls import BLSPrivateKey, BLSPublicKey
from .eip2333 import derive_child_sk, derive_master_sk
from ..records import HDKeyRecord, dump_record, parse_record
from ..runtime.errors import InvalidKeyError, InvalidPathError, InvalidSeedError, MalformedRecordError

logger = logging.getLogger(__name__)

BASE_PATH = "m/12381/3600"
_BASE_INDICES = (12381, 3600)

# One or more "/<index>" groups; an index is capped at three digits
_RELATIVE_PATH = re.compile(r"(?:/[0-9]{1,3})+")
_SEGMENT = re.compile(r"/([0-9]{1,3})")


class HDKey:
    """
    BLS private key bound to its derivation path.

    The id is assigned when the key object is created; it is not derived from
    the key material, so two derivations of the same path carry different ids.
    """

    def __init__(self, private_key: BLSPrivateKey, path: str, key_id: Optional[UUID] = None):
        """
        Initialize an HD key.

        Args:
            private_key: BLS private key
            path: Absolute derivation path of the key
            key_id: Identifier to reuse (a fresh one is generated if omitted)
        """
        self._id = key_id or uuid4()
        self._private_key = private_key
        self._path = path

    @property
    def id(self) -> UUID:
        """Unique identifier of this key object."""
        return self._id

    @property
    def path(self) -> str:
        """Absolute derivation path."""
        return self._path

    def private_key(self) -> BLSPrivateKey:
        """Get the BLS private key."""
        return self._private_key

    def public_key(self) -> BLSPublicKey:
        """Get the BLS public key."""
        return self._private_key.public_key()

    def derive(self, relative_path: str) -> HDKey:
        """
        Derive a descendant key.

        Args:
            relative_path: Path such as "/1/0/0", relative to this key

        Returns:
            New HDKey with a fresh id and the extended path

        Raises:
            InvalidPathError: If the path does not match the relative path grammar
        """
        if not isinstance(relative_path, str) or _RELATIVE_PATH.fullmatch(relative_path) is None:
            raise InvalidPathError(details={"path": relative_path})

        scalar = self._private_key.to_int()
        path = self._path
        for segment in _SEGMENT.findall(relative_path):
            index = int(segment)
            scalar = derive_child_sk(scalar, index)
            path += f"/{index}"

        logger.debug(f"Derived key at {path}")
        return HDKey(BLSPrivateKey(scalar), path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to record representation."""
        record = HDKeyRecord(
            id=self._id,
            path=self._path,
            private_scalar=self._private_key.to_hex(),
        )
        return dump_record(record)

    @classmethod
    def from_record(cls, record: HDKeyRecord) -> HDKey:
        """Create from a validated record."""
        try:
            private_key = BLSPrivateKey.from_hex(record.private_scalar)
        except InvalidKeyError as e:
            raise MalformedRecordError(f"could not parse privateScalar: {e.message}", cause=e)
        return cls(private_key, record.path, key_id=record.id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> HDKey:
        """
        Create from record representation.

        Raises:
            MalformedRecordError: If a field is missing or the scalar does not parse
        """
        return cls.from_record(parse_record(HDKeyRecord, data))

    def __eq__(self, other) -> bool:
        if not isinstance(other, HDKey):
            return False
        return (self._id == other._id and self._path == other._path
                and self._private_key == other._private_key)

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        return f"HDKey({self._path})"

    def __repr__(self) -> str:
        return f"HDKey(id='{self._id}', path='{self._path}')"


def master_key_from_seed(seed: bytes) -> HDKey:
    """
    Derive the master key at the base path from a root seed.

    Args:
        seed: Root secret bytes

    Returns:
        HDKey at m/12381/3600

    Raises:
        InvalidSeedError: If the seed is empty
    """
    if not seed:
        raise InvalidSeedError()

    scalar = derive_master_sk(bytes(seed))
    for index in _BASE_INDICES:
        scalar = derive_child_sk(scalar, index)
    return HDKey(BLSPrivateKey(scalar), BASE_PATH)


__all__ = [
    "BASE_PATH",
    "HDKey",
    "master_key_from_seed",
]
