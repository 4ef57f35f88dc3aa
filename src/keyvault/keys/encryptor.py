r"""
Encryption of secret material at rest.

Storage backends call an Encryptor around every secret they persist (the
portfolio seed and key-bearing records). The vault itself never encrypts.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple
import base64
import logging
import os
import threading

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.backends import default_backend

from ..runtime.errors import EncryptionError

logger = logging.getLogger(__name__)


class Encryptor(ABC):
    """
    Password-based encryption capability.

    Encrypted payloads are JSON-compatible dictionaries so that backends can
    embed them in their own records.
    """

    @abstractmethod
    def name(self) -> str:
        """Short identifier of the scheme."""
        pass

    @abstractmethod
    def encrypt(self, secret: bytes, password: bytes) -> Dict[str, Any]:
        """
        Encrypt a secret.

        Args:
            secret: Plaintext bytes
            password: Encryption password

        Returns:
            Encrypted payload
        """
        pass

    @abstractmethod
    def decrypt(self, data: Dict[str, Any], password: bytes) -> bytes:
        """
        Decrypt a payload produced by encrypt().

        Args:
            data: Encrypted payload
            password: Encryption password

        Returns:
            Plaintext bytes

        Raises:
            EncryptionError: If the password is wrong or the payload is corrupt
        """
        pass


class FernetEncryptor(Encryptor):
    """
    AES encryption with PBKDF2 key derivation.

    Uses Fernet (AES-128-CBC with HMAC-SHA256) for authenticated encryption.
    Each payload carries its own random salt.
    """

    # PBKDF2 iteration count - OWASP 2023 recommendation for SHA256
    PBKDF2_ITERATIONS = 480000
    SALT_SIZE = 16
    # Derived keys kept per (password, salt, iterations)
    KEY_CACHE_SIZE = 4096

    def __init__(self, iterations: Optional[int] = None):
        """
        Initialize encryptor.

        Args:
            iterations: PBKDF2 iteration count override
        """
        self.iterations = iterations or self.PBKDF2_ITERATIONS
        self._keys: "OrderedDict[Tuple[bytes, bytes, int], Fernet]" = OrderedDict()
        self._keys_lock = threading.Lock()

    def name(self) -> str:
        return "fernet-pbkdf2"

    def _fernet(self, password: bytes, salt: bytes, iterations: int) -> Fernet:
        """
        Get the Fernet instance for a password and salt.

        PBKDF2 runs once per salt; every payload sealed or opened again
        under the same salt reuses the derived key.
        """
        cache_key = (bytes(password), salt, iterations)
        with self._keys_lock:
            fernet = self._keys.get(cache_key)
            if fernet is not None:
                self._keys.move_to_end(cache_key)
                return fernet

        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt,
            iterations=iterations,
            backend=default_backend()
        )
        fernet = Fernet(base64.urlsafe_b64encode(kdf.derive(password)))

        with self._keys_lock:
            self._keys[cache_key] = fernet
            if len(self._keys) > self.KEY_CACHE_SIZE:
                self._keys.popitem(last=False)
        return fernet

    def encrypt(self, secret: bytes, password: bytes) -> Dict[str, Any]:
        """Encrypt a secret under a password-derived key."""
        if not password:
            raise EncryptionError("password is required for encryption")

        salt = os.urandom(self.SALT_SIZE)
        token = self._fernet(password, salt, self.iterations).encrypt(secret)
        return {
            "scheme": self.name(),
            "salt": base64.b64encode(salt).decode('ascii'),
            "iterations": self.iterations,
            "cipher": token.decode('ascii'),
        }

    def decrypt(self, data: Dict[str, Any], password: bytes) -> bytes:
        """Decrypt a payload produced by encrypt()."""
        if not password:
            raise EncryptionError("password is required for decryption")

        try:
            salt = base64.b64decode(data["salt"])
            iterations = int(data["iterations"])
            token = data["cipher"].encode('ascii')
        except (KeyError, TypeError, ValueError) as e:
            raise EncryptionError("malformed encrypted payload", cause=e)

        try:
            return self._fernet(password, salt, iterations).decrypt(token)
        except InvalidToken as e:
            raise EncryptionError("could not decrypt payload, wrong password?", cause=e)


__all__ = [
    "Encryptor",
    "FernetEncryptor",
]
