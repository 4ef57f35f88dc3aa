r"""
HD wallets.

A wallet owns one key derived from the vault's master key and derives
validator accounts beneath it. Wallets keep no account cache: listing and
lookups always go through storage.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4
import logging

from ..crypto.bls import BLSPublicKey
from ..crypto.hd_key import HDKey
from ..records import WalletRecord, parse_record
from ..runtime.errors import DuplicateNameError
from .account import ValidatorAccount
from .context import KeyVaultContext

logger = logging.getLogger(__name__)


def withdrawal_path(index: int) -> str:
    """Relative path of the withdrawal key for an account ordinal."""
    return f"/{index}"


def validation_path(index: int) -> str:
    """Relative path of the validation (signing) key for an account ordinal."""
    return f"/{index}/0"


class HDWallet:
    """
    Hierarchical deterministic wallet.

    Wallet n of a vault sits at /n below the master key. Account n of a
    wallet withdraws with /n and signs with /n/0 below the wallet key, so
    account 1 of wallet 0 signs at m/12381/3600/0/1/0. This is not the
    EIP-2334 validator layout beyond account 0.
    """

    def __init__(
        self,
        name: str,
        key: HDKey,
        path: str,
        context: KeyVaultContext,
        wallet_id: Optional[UUID] = None
    ):
        """
        Initialize wallet.

        Args:
            name: Wallet name (uniqueness is enforced by the vault)
            key: Wallet key
            path: Path of the wallet key relative to the vault's master key
            context: Storage context shared with the owning vault
            wallet_id: Identifier to reuse (a fresh one is generated if omitted)
        """
        self._id = wallet_id or uuid4()
        self._name = name
        self._key = key
        self._path = path
        self._context = context

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> str:
        """Wallet key path relative to the vault's master key."""
        return self._path

    def public_key(self) -> BLSPublicKey:
        """Get the wallet public key."""
        return self._key.public_key()

    def create_validator_account(self, name: str) -> ValidatorAccount:
        """
        Create a new validator account in the wallet.

        The account ordinal is the number of accounts already stored for this
        wallet.

        Args:
            name: Account name

        Returns:
            Created account

        Raises:
            DuplicateNameError: If an account with the name already exists
            InvalidPathError: If the wallet already holds 1000 accounts
        """
        storage = self._context.storage
        existing = storage.list_accounts(self._id)
        if any(account.name == name for account in existing):
            raise DuplicateNameError(f"account already exists: {name}")

        index = len(existing)
        withdrawal_key = self._key.derive(withdrawal_path(index))
        validation_key = self._key.derive(validation_path(index))
        account = ValidatorAccount(
            name=name,
            validation_key=validation_key,
            withdrawal_public_key=withdrawal_key.public_key(),
            wallet_id=self._id
        )

        storage.save_account(account)

        logger.debug(f"Created account {name} at {account.path} in wallet {self._name}")
        return account

    def accounts(self) -> List[ValidatorAccount]:
        """List all accounts in the wallet."""
        return self._context.storage.list_accounts(self._id)

    def account_by_id(self, account_id: UUID) -> Optional[ValidatorAccount]:
        """
        Get an account by ID.

        Args:
            account_id: Account identifier

        Returns:
            Account if found
        """
        return self._context.storage.open_account(self._id, account_id)

    def account_by_name(self, name: str) -> Optional[ValidatorAccount]:
        """
        Get an account by name.

        Args:
            name: Account name

        Returns:
            Account if found
        """
        for account in self.accounts():
            if account.name == name:
                return account
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to record representation."""
        return {
            "id": str(self._id),
            "name": self._name,
            "path": self._path,
            "key": self._key.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], context: KeyVaultContext) -> HDWallet:
        """
        Create from record representation.

        Args:
            data: Wallet record
            context: Storage context to bind the wallet to

        Raises:
            MalformedRecordError: If the record is incomplete or does not parse
        """
        record = parse_record(WalletRecord, data)
        return cls(
            name=record.name,
            key=HDKey.from_record(record.key),
            path=record.path,
            context=context,
            wallet_id=record.id
        )

    def __str__(self) -> str:
        return f"HDWallet({self._name}, {self._path})"

    def __repr__(self) -> str:
        return f"HDWallet(id='{self._id}', name='{self._name}', path='{self._path}')"


__all__ = [
    "HDWallet",
    "withdrawal_path",
    "validation_path",
]
