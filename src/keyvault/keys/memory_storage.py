r"""
In-memory storage backend.

Keeps every object as a JSON document, exactly as a persistent backend would,
so saving and opening always go through the record formats. Wallet and
account documents and the seed are passed through the encryptor when one is
set; the vault record carries no secrets and is kept in the clear.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Union
from uuid import UUID
import json
import logging

from ..runtime.errors import EncryptionError, NotFoundError
from .account import ValidatorAccount
from .context import KeyVaultContext
from .encryptor import Encryptor
from .storage import Storage
from .vault import KeyVault
from .wallet import HDWallet

logger = logging.getLogger(__name__)

Sealed = Union[bytes, Dict[str, Any]]


class MemoryStorage(Storage):
    """
    In-memory storage implementation.

    Stores records in memory with no persistence.
    """

    def __init__(self):
        """Initialize memory storage."""
        self._portfolio: Optional[str] = None
        self._seed: Optional[Sealed] = None
        self._wallets: Dict[UUID, Sealed] = {}
        self._accounts: Dict[UUID, Dict[UUID, Sealed]] = {}
        self._encryptor: Optional[Encryptor] = None
        self._password: Optional[bytes] = None

    def name(self) -> str:
        return "in-memory"

    def _seal(self, payload: bytes) -> Sealed:
        if self._encryptor is None:
            return payload
        return self._encryptor.encrypt(payload, self._password)

    def _unseal(self, sealed: Sealed) -> bytes:
        if isinstance(sealed, bytes):
            return sealed
        if self._encryptor is None:
            raise EncryptionError("stored secret is encrypted but no encryptor is set")
        return self._encryptor.decrypt(sealed, self._password)

    def _context(self) -> KeyVaultContext:
        return KeyVaultContext(self, self._encryptor, self._password)

    def set_encryptor(self, encryptor: Optional[Encryptor], password: Optional[bytes]) -> None:
        """Set the encryption applied to seed, wallet and account documents."""
        self._encryptor = encryptor
        self._password = password

    def save_portfolio(self, vault: KeyVault) -> None:
        """Store the vault record."""
        self._portfolio = json.dumps(vault.to_dict())
        logger.debug(f"Stored key vault {vault.id} in memory storage")

    def open_portfolio(self) -> Optional[Dict[str, Any]]:
        """Load the vault record."""
        if self._portfolio is None:
            return None
        return json.loads(self._portfolio)

    def save_wallet(self, wallet: HDWallet) -> None:
        """Store a wallet document."""
        payload = json.dumps(wallet.to_dict()).encode('utf-8')
        self._wallets[wallet.id] = self._seal(payload)
        logger.debug(f"Stored wallet {wallet.id} in memory storage")

    def open_wallet(self, wallet_id: UUID) -> HDWallet:
        """Load a wallet document."""
        sealed = self._wallets.get(wallet_id)
        if sealed is None:
            raise NotFoundError(f"wallet not found: {wallet_id}")
        return HDWallet.from_dict(json.loads(self._unseal(sealed)), self._context())

    def delete_wallet(self, wallet_id: UUID) -> bool:
        """
        Delete a wallet document and its accounts.

        The vault's name index is left untouched.

        Returns:
            True if the wallet was deleted
        """
        if wallet_id not in self._wallets:
            return False
        del self._wallets[wallet_id]
        self._accounts.pop(wallet_id, None)
        logger.debug(f"Deleted wallet {wallet_id} from memory storage")
        return True

    def save_account(self, account: ValidatorAccount) -> None:
        """Store an account document under its wallet."""
        payload = json.dumps(account.to_dict()).encode('utf-8')
        self._accounts.setdefault(account.wallet_id, {})[account.id] = self._seal(payload)
        logger.debug(f"Stored account {account.id} of wallet {account.wallet_id} in memory storage")

    def open_account(self, wallet_id: UUID, account_id: UUID) -> Optional[ValidatorAccount]:
        """Load an account document, None if unknown."""
        sealed = self._accounts.get(wallet_id, {}).get(account_id)
        if sealed is None:
            return None
        return ValidatorAccount.from_dict(json.loads(self._unseal(sealed)))

    def list_accounts(self, wallet_id: UUID) -> List[ValidatorAccount]:
        """Load every account document of a wallet."""
        return [
            ValidatorAccount.from_dict(json.loads(self._unseal(sealed)))
            for sealed in self._accounts.get(wallet_id, {}).values()
        ]

    def securely_save_portfolio_seed(self, seed: bytes) -> None:
        """Store the seed, encrypted if an encryptor is set."""
        self._seed = self._seal(bytes(seed))

    def securely_fetch_portfolio_seed(self) -> bytes:
        """Load the seed."""
        if self._seed is None:
            raise NotFoundError("portfolio seed not found")
        return self._unseal(self._seed)

    def __repr__(self) -> str:
        return f"MemoryStorage(wallets={len(self._wallets)}, encrypted={self._encryptor is not None})"


__all__ = ["MemoryStorage"]
