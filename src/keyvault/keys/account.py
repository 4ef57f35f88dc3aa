r"""
Validator accounts.

An account is the leaf of the key tree: a named signing key derived from a
wallet. Only the validation key's secret is kept; the withdrawal key is
reduced to its public part at creation time.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
from uuid import UUID, uuid4
import logging

from ..crypto.bls import BLSPublicKey
from ..crypto.hd_key import HDKey
from ..records import AccountRecord, parse_record
from ..runtime.errors import InvalidKeyError, MalformedRecordError

logger = logging.getLogger(__name__)


class ValidatorAccount:
    """
    Validator account held by an HD wallet.

    Created through HDWallet.create_validator_account(), never directly by
    callers.
    """

    def __init__(
        self,
        name: str,
        validation_key: HDKey,
        withdrawal_public_key: BLSPublicKey,
        wallet_id: UUID,
        account_id: Optional[UUID] = None
    ):
        """
        Initialize account.

        Args:
            name: Account name, unique within its wallet
            validation_key: Signing key
            withdrawal_public_key: Public part of the withdrawal key
            wallet_id: Owning wallet identifier
            account_id: Identifier to reuse (a fresh one is generated if omitted)
        """
        self._id = account_id or uuid4()
        self._name = name
        self._wallet_id = wallet_id
        self._validation_key = validation_key
        self._withdrawal_public_key = withdrawal_public_key

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def wallet_id(self) -> UUID:
        return self._wallet_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> str:
        """Absolute derivation path of the validation key."""
        return self._validation_key.path

    def public_key(self) -> BLSPublicKey:
        """Get the validation public key."""
        return self._validation_key.public_key()

    def withdrawal_public_key(self) -> BLSPublicKey:
        """Get the withdrawal public key."""
        return self._withdrawal_public_key

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message with the validation key.

        Args:
            message: Message bytes

        Returns:
            96-byte BLS signature
        """
        return self._validation_key.private_key().sign(message)

    def verify(self, signature: bytes, message: bytes) -> bool:
        """Verify a signature made by this account."""
        return self.public_key().verify(signature, message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to record representation."""
        return {
            "id": str(self._id),
            "walletId": str(self._wallet_id),
            "name": self._name,
            "validationKey": self._validation_key.to_dict(),
            "withdrawalPubKey": self._withdrawal_public_key.to_hex(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ValidatorAccount:
        """
        Create from record representation.

        Raises:
            MalformedRecordError: If the record is incomplete or does not parse
        """
        record = parse_record(AccountRecord, data)
        try:
            withdrawal_public_key = BLSPublicKey.from_hex(record.withdrawal_pub_key)
        except InvalidKeyError as e:
            raise MalformedRecordError(f"could not parse withdrawalPubKey: {e.message}", cause=e)

        return cls(
            name=record.name,
            validation_key=HDKey.from_record(record.validation_key),
            withdrawal_public_key=withdrawal_public_key,
            wallet_id=record.wallet_id,
            account_id=record.id
        )

    def __str__(self) -> str:
        return f"ValidatorAccount({self._name}, {self.path})"

    def __repr__(self) -> str:
        return f"ValidatorAccount(id='{self._id}', name='{self._name}', wallet='{self._wallet_id}')"


__all__ = ["ValidatorAccount"]
