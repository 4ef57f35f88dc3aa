"""
Storage doubles for failure scenarios.

Each double is a working MemoryStorage that fails one chosen operation.
"""

from __future__ import annotations
from typing import Set
from uuid import UUID

from keyvault import MemoryStorage, StorageError


class FailingStorage(MemoryStorage):
    """
    Memory storage whose selected operations raise StorageError.

    Operations are armed by name after the vault has been bootstrapped, e.g.
    ``storage.fail_on.add("save_wallet")``.
    """

    def __init__(self):
        super().__init__()
        self.fail_on: Set[str] = set()

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.fail_on:
            raise StorageError(f"{operation} failed")

    def save_wallet(self, wallet) -> None:
        self._maybe_fail("save_wallet")
        super().save_wallet(wallet)

    def save_portfolio(self, vault) -> None:
        self._maybe_fail("save_portfolio")
        super().save_portfolio(vault)

    def save_account(self, account) -> None:
        self._maybe_fail("save_account")
        super().save_account(account)


class FlakyWalletStorage(MemoryStorage):
    """Memory storage that cannot open a chosen set of wallets."""

    def __init__(self):
        super().__init__()
        self.broken: Set[UUID] = set()

    def open_wallet(self, wallet_id: UUID):
        if wallet_id in self.broken:
            raise StorageError(f"wallet {wallet_id} is corrupt")
        return super().open_wallet(wallet_id)
