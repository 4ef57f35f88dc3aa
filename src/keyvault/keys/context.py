"""Shared context handed from a vault to the wallets it spawns."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .encryptor import Encryptor
    from .storage import Storage


@dataclass(frozen=True)
class KeyVaultContext:
    """Storage backend plus the optional encryption settings applied to it."""
    storage: "Storage"
    encryptor: Optional["Encryptor"] = None
    password: Optional[bytes] = None


__all__ = ["KeyVaultContext"]
