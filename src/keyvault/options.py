"""
Key vault bootstrap options.

Collects everything needed to create or open a vault: the storage backend,
optional encryption, and either a seed (new vault) or the id of a stored
vault (existing vault). Setters return the options object so calls can be
chained.
"""

from __future__ import annotations
from typing import Optional, Any, Union
from uuid import UUID
import secrets

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .keys.encryptor import Encryptor
from .keys.storage import Storage
from .runtime.errors import ConfigurationError

# Length of a generated seed
SEED_SIZE = 32


class KeyVaultOptions(BaseModel):
    """
    Options for new_key_vault() and open_key_vault().

    The storage handle is checked against the Storage contract when it is set,
    not when the vault first uses it.
    """
    encryptor: Optional[Encryptor] = Field(default=None, description="Encryption applied to stored secrets")
    password: Optional[bytes] = Field(default=None, description="Encryption password")
    storage: Optional[Storage] = Field(default=None, description="Storage backend")
    simple_signer: bool = Field(default=False, description="Enable the simple signer")
    seed: Optional[bytes] = Field(default=None, description="Portfolio seed for a new vault")
    vault_id: Optional[UUID] = Field(default=None, description="Expected id of a stored vault")

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    @field_validator("seed")
    @classmethod
    def validate_seed(cls, v: Optional[bytes]) -> Optional[bytes]:
        """Reject empty seeds."""
        if v is not None and len(v) == 0:
            raise ValueError("seed can't be empty")
        return v

    def _assign(self, field: str, value: Any) -> KeyVaultOptions:
        try:
            setattr(self, field, value)
        except ValidationError as e:
            raise ConfigurationError(
                f"invalid {field}: {e.errors()[0]['msg']}",
                details={"field": field},
                cause=e
            )
        return self

    def set_encryptor(self, encryptor: Encryptor) -> KeyVaultOptions:
        """Set the encryption capability."""
        return self._assign("encryptor", encryptor)

    def set_storage(self, storage: Storage) -> KeyVaultOptions:
        """Set the storage backend."""
        return self._assign("storage", storage)

    def set_password(self, password: Union[str, bytes]) -> KeyVaultOptions:
        """Set the encryption password."""
        if isinstance(password, str):
            password = password.encode('utf-8')
        return self._assign("password", password)

    def enable_simple_signer(self, value: bool = True) -> KeyVaultOptions:
        """Toggle the simple signer."""
        return self._assign("simple_signer", value)

    def set_seed(self, seed: bytes) -> KeyVaultOptions:
        """Set an explicit portfolio seed."""
        return self._assign("seed", seed)

    def generate_seed(self) -> KeyVaultOptions:
        """Set a freshly generated random 32-byte seed."""
        return self._assign("seed", secrets.token_bytes(SEED_SIZE))

    def set_vault_id(self, vault_id: Union[str, UUID]) -> KeyVaultOptions:
        """Set the id of the stored vault to open."""
        return self._assign("vault_id", vault_id)

    def __repr__(self) -> str:
        return (f"KeyVaultOptions(storage={self.storage!r}, encrypted={self.encryptor is not None}, "
                f"seed={'set' if self.seed else 'unset'}, vault_id={self.vault_id})")


__all__ = ["KeyVaultOptions", "SEED_SIZE"]
