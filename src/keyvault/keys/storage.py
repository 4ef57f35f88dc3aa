r"""
Storage contract for the key vault.

Defines how a vault, its wallets and their accounts are persisted, plus the
secure storage of the portfolio seed. Every operation may raise a backend
specific error; the vault propagates those unchanged.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from .account import ValidatorAccount
    from .encryptor import Encryptor
    from .vault import KeyVault
    from .wallet import HDWallet


class Storage(ABC):
    """
    Abstract storage interface.

    Implementations hold one portfolio (vault) together with its wallets,
    accounts and encrypted seed.
    """

    @abstractmethod
    def name(self) -> str:
        """Human readable name of the backend."""
        pass

    @abstractmethod
    def save_portfolio(self, vault: KeyVault) -> None:
        """
        Persist the vault record.

        Args:
            vault: Vault to store; only its record (id, flags, name index) is kept
        """
        pass

    @abstractmethod
    def open_portfolio(self) -> Optional[Dict[str, Any]]:
        """
        Load the stored vault record.

        Returns:
            The record produced by KeyVault.to_dict(), or None if no vault was saved
        """
        pass

    @abstractmethod
    def save_wallet(self, wallet: HDWallet) -> None:
        """
        Persist a wallet.

        Args:
            wallet: Wallet to store
        """
        pass

    @abstractmethod
    def open_wallet(self, wallet_id: UUID) -> HDWallet:
        """
        Load a wallet by ID.

        Args:
            wallet_id: Wallet identifier

        Returns:
            Wallet bound to a context backed by this storage

        Raises:
            NotFoundError: If no wallet with that ID exists
        """
        pass

    @abstractmethod
    def save_account(self, account: ValidatorAccount) -> None:
        """
        Persist an account under its wallet.

        Args:
            account: Account to store
        """
        pass

    @abstractmethod
    def open_account(self, wallet_id: UUID, account_id: UUID) -> Optional[ValidatorAccount]:
        """
        Load an account.

        An unknown account is not an error.

        Args:
            wallet_id: Owning wallet identifier
            account_id: Account identifier

        Returns:
            Account if found, None otherwise
        """
        pass

    @abstractmethod
    def list_accounts(self, wallet_id: UUID) -> List[ValidatorAccount]:
        """
        List every account stored for a wallet.

        Args:
            wallet_id: Owning wallet identifier

        Returns:
            Accounts in no particular order
        """
        pass

    @abstractmethod
    def securely_save_portfolio_seed(self, seed: bytes) -> None:
        """
        Persist the portfolio seed, encrypted if an encryptor is set.

        Args:
            seed: Root secret
        """
        pass

    @abstractmethod
    def securely_fetch_portfolio_seed(self) -> bytes:
        """
        Load the portfolio seed, decrypting it if an encryptor is set.

        Returns:
            Root secret

        Raises:
            NotFoundError: If no seed was saved
        """
        pass

    @abstractmethod
    def set_encryptor(self, encryptor: Optional[Encryptor], password: Optional[bytes]) -> None:
        """
        Set the encryption applied to persisted secret material.

        Args:
            encryptor: Encryption capability, or None to store plaintext
            password: Encryption password
        """
        pass

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.name()})"


__all__ = ["Storage"]
