r"""
Key vault (portfolio) for validator keys.

The vault owns the master key derived from the portfolio seed and a persistent
name -> wallet id index. Wallets are derived at /0, /1, ... below the master
key in creation order.
"""

from __future__ import annotations
from typing import Any, Dict, Iterator, Optional, TYPE_CHECKING
from uuid import UUID, uuid4
import logging
import queue
import threading

from ..crypto.hd_key import HDKey, master_key_from_seed
from ..records import KeyVaultRecord, dump_record, parse_record
from ..runtime.errors import ConfigurationError, DuplicateNameError, NotFoundError
from .context import KeyVaultContext
from .wallet import HDWallet

if TYPE_CHECKING:
    from ..options import KeyVaultOptions

logger = logging.getLogger(__name__)

# Capacity of the wallet enumeration channel
WALLETS_CHANNEL_SIZE = 1024
_PUT_TIMEOUT = 0.1


class KeyVault:
    """
    Root aggregate of the key hierarchy.

    Not safe for concurrent mutation: a vault instance assumes a single
    writer.
    """

    def __init__(
        self,
        master_key: Optional[HDKey],
        context: Optional[KeyVaultContext],
        vault_id: Optional[UUID] = None,
        index_mapper: Optional[Dict[str, UUID]] = None,
        enable_simple_signer: bool = False
    ):
        """
        Initialize vault.

        Args:
            master_key: Key at the base path, or None for a record-only vault
            context: Storage context shared with spawned wallets
            vault_id: Identifier to reuse (a fresh one is generated if omitted)
            index_mapper: Existing wallet name -> id index
            enable_simple_signer: Simple signer feature flag
        """
        self._id = vault_id or uuid4()
        self._master_key = master_key
        self._context = context
        self._index_mapper: Dict[str, UUID] = dict(index_mapper or {})
        self._enable_simple_signer = enable_simple_signer

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def enable_simple_signer(self) -> bool:
        return self._enable_simple_signer

    def wallet_names(self):
        """Names of all registered wallets."""
        return list(self._index_mapper.keys())

    def wallet_count(self) -> int:
        """Number of registered wallets."""
        return len(self._index_mapper)

    def _require_context(self) -> KeyVaultContext:
        if self._context is None:
            raise ConfigurationError("vault has no storage context")
        return self._context

    def create_wallet(self, name: str) -> HDWallet:
        """
        Create a new wallet.

        The wallet is derived at /<n> where n is the number of registered
        wallets. The name is registered first, then the wallet and the vault
        are saved; if either save fails the registration is undone and the
        error re-raised. A wallet saved before a failed vault save is left
        orphaned in storage.

        Args:
            name: Wallet name

        Returns:
            Created wallet

        Raises:
            DuplicateNameError: If a wallet with the name already exists
        """
        context = self._require_context()
        if self._master_key is None:
            raise ConfigurationError("vault has no master key")
        if name in self._index_mapper:
            raise DuplicateNameError(f"wallet already exists: {name}")

        path = f"/{len(self._index_mapper)}"
        key = self._master_key.derive(path)
        wallet = HDWallet(name, key, path, context)

        self._index_mapper[name] = wallet.id
        try:
            context.storage.save_wallet(wallet)
            context.storage.save_portfolio(self)
        except Exception as e:
            del self._index_mapper[name]
            logger.warning(f"Failed to save wallet {name}, registration rolled back: {e}")
            raise

        logger.debug(f"Created wallet {name} at {path}")
        return wallet

    def wallet_by_id(self, wallet_id: UUID) -> HDWallet:
        """
        Get a wallet by ID.

        Raises:
            NotFoundError: If storage has no such wallet
        """
        return self._require_context().storage.open_wallet(wallet_id)

    def wallet_by_name(self, name: str) -> HDWallet:
        """
        Get a wallet by name.

        Raises:
            NotFoundError: If the name is not registered
        """
        wallet_id = self._index_mapper.get(name)
        if wallet_id is None:
            raise NotFoundError(f"no wallet found: {name}")
        return self.wallet_by_id(wallet_id)

    def wallets(self) -> Iterator[HDWallet]:
        """
        Iterate over every wallet reachable from the name index.

        A producer thread resolves wallets into a bounded channel while the
        caller consumes them. Order is unspecified. Wallets that cannot be
        resolved are skipped. Abandoning the iterator stops the producer.

        Yields:
            Resolved wallets
        """
        entries = list(self._index_mapper.items())
        channel: queue.Queue = queue.Queue(maxsize=WALLETS_CHANNEL_SIZE)
        abandoned = threading.Event()
        done = object()

        def put(item) -> bool:
            while not abandoned.is_set():
                try:
                    channel.put(item, timeout=_PUT_TIMEOUT)
                    return True
                except queue.Full:
                    continue
            return False

        def produce() -> None:
            try:
                for name, wallet_id in entries:
                    if abandoned.is_set():
                        return
                    try:
                        wallet = self.wallet_by_id(wallet_id)
                    except Exception as e:
                        logger.warning(f"Skipping wallet {name} ({wallet_id}): {e}")
                        continue
                    if not put(wallet):
                        return
            finally:
                put(done)

        producer = threading.Thread(target=produce, name=f"keyvault-wallets-{self._id}", daemon=True)
        producer.start()
        try:
            while True:
                item = channel.get()
                if item is done:
                    return
                yield item
        finally:
            abandoned.set()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to record representation (master key excluded)."""
        record = KeyVaultRecord(
            id=self._id,
            enable_simple_signer=self._enable_simple_signer,
            index_mapper=self._index_mapper,
        )
        return dump_record(record)

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        master_key: Optional[HDKey] = None,
        context: Optional[KeyVaultContext] = None
    ) -> KeyVault:
        """
        Create from record representation.

        Args:
            data: Vault record
            master_key: Master key rebuilt from the stored seed
            context: Storage context

        Raises:
            MalformedRecordError: "could not find var: <field>" for a missing
                field, or a parse error for a mis-typed one
        """
        record = parse_record(KeyVaultRecord, data)
        return cls(
            master_key=master_key,
            context=context,
            vault_id=record.id,
            index_mapper=record.index_mapper,
            enable_simple_signer=record.enable_simple_signer
        )

    def __str__(self) -> str:
        return f"KeyVault({self._id}, {len(self._index_mapper)} wallets)"

    def __repr__(self) -> str:
        return f"KeyVault(id='{self._id}', wallets={len(self._index_mapper)})"


def _context_from_options(options: KeyVaultOptions) -> KeyVaultContext:
    storage = options.storage
    if storage is None:
        raise ConfigurationError("storage is required")
    if options.encryptor is not None and not options.password:
        raise ConfigurationError(
            "password is required when an encryptor is set",
            details={"field": "password"}
        )
    if options.encryptor is not None:
        storage.set_encryptor(options.encryptor, options.password)
    return KeyVaultContext(storage, options.encryptor, options.password)


def new_key_vault(options: KeyVaultOptions) -> KeyVault:
    """
    Create a new vault from a seed and persist it.

    The seed is saved through the storage's secure seed operations, then the
    empty vault record is saved.

    Args:
        options: Options carrying storage and seed

    Returns:
        New vault

    Raises:
        ConfigurationError: If storage or seed is missing
        InvalidSeedError: If the seed is empty
    """
    if options.seed is None:
        raise ConfigurationError("seed is required, call set_seed() or generate_seed()")
    context = _context_from_options(options)

    master_key = master_key_from_seed(options.seed)
    context.storage.securely_save_portfolio_seed(options.seed)

    vault = KeyVault(master_key, context, enable_simple_signer=options.simple_signer)
    context.storage.save_portfolio(vault)

    logger.debug(f"Created key vault {vault.id} in {context.storage}")
    return vault


def open_key_vault(options: KeyVaultOptions) -> KeyVault:
    """
    Open the vault stored in the configured storage.

    Args:
        options: Options carrying storage and, optionally, the expected vault id

    Returns:
        Vault with its master key rebuilt from the stored seed

    Raises:
        NotFoundError: If no vault is stored, or its id differs from the requested one
    """
    context = _context_from_options(options)

    data = context.storage.open_portfolio()
    if data is None:
        raise NotFoundError("key vault not found")

    master_key = master_key_from_seed(context.storage.securely_fetch_portfolio_seed())
    vault = KeyVault.from_dict(data, master_key=master_key, context=context)
    if options.vault_id is not None and vault.id != options.vault_id:
        raise NotFoundError(f"key vault not found: {options.vault_id}")

    logger.debug(f"Opened key vault {vault.id} from {context.storage}")
    return vault


__all__ = [
    "KeyVault",
    "new_key_vault",
    "open_key_vault",
    "WALLETS_CHANNEL_SIZE",
]
