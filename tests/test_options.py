"""
Bootstrap options and vault lifecycle tests.
"""

import uuid

import pytest

from helpers.factories import mk_seed

from keyvault import (
    ConfigurationError,
    EncryptionError,
    FernetEncryptor,
    InvalidSeedError,
    KeyVaultOptions,
    MemoryStorage,
    NotFoundError,
    master_key_from_seed,
    new_key_vault,
    open_key_vault,
)
from keyvault.options import SEED_SIZE


class TestKeyVaultOptions:
    """Builder behaviour."""

    def test_defaults(self):
        options = KeyVaultOptions()
        assert options.storage is None
        assert options.encryptor is None
        assert options.password is None
        assert options.seed is None
        assert options.simple_signer is False

    def test_setters_chain(self, storage, seed):
        encryptor = FernetEncryptor(iterations=1000)
        options = (KeyVaultOptions()
                   .set_storage(storage)
                   .set_encryptor(encryptor)
                   .set_password("password")
                   .set_seed(seed)
                   .enable_simple_signer())

        assert options.storage is storage
        assert options.encryptor is encryptor
        assert options.password == b"password"
        assert options.seed == seed
        assert options.simple_signer is True

    def test_generate_seed(self):
        first = KeyVaultOptions().generate_seed().seed
        second = KeyVaultOptions().generate_seed().seed
        assert len(first) == SEED_SIZE == 32
        assert first != second

    def test_empty_seed_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            KeyVaultOptions().set_seed(b"")
        assert exc_info.value.details == {"field": "seed"}

    def test_non_storage_rejected(self):
        with pytest.raises(ConfigurationError):
            KeyVaultOptions().set_storage(object())

    def test_non_encryptor_rejected(self):
        with pytest.raises(ConfigurationError):
            KeyVaultOptions().set_encryptor("fernet")

    def test_vault_id_from_string(self):
        vault_id = uuid.uuid4()
        options = KeyVaultOptions().set_vault_id(str(vault_id))
        assert options.vault_id == vault_id

    def test_repr_hides_seed(self, seed):
        text = repr(KeyVaultOptions().set_seed(seed))
        assert seed.hex() not in text
        assert "seed=set" in text


class TestNewKeyVault:
    """Vault creation."""

    def test_requires_storage(self, seed):
        with pytest.raises(ConfigurationError):
            new_key_vault(KeyVaultOptions().set_seed(seed))

    def test_requires_seed(self, storage):
        with pytest.raises(ConfigurationError):
            new_key_vault(KeyVaultOptions().set_storage(storage))

    def test_encryptor_without_password(self, storage, seed):
        options = (KeyVaultOptions()
                   .set_storage(storage)
                   .set_encryptor(FernetEncryptor(iterations=1000))
                   .set_seed(seed))

        with pytest.raises(ConfigurationError) as exc_info:
            new_key_vault(options)

        assert exc_info.value.details == {"field": "password"}
        assert storage.open_portfolio() is None
        with pytest.raises(NotFoundError):
            storage.securely_fetch_portfolio_seed()

    def test_encryptor_with_empty_password(self, storage, seed):
        options = (KeyVaultOptions()
                   .set_storage(storage)
                   .set_encryptor(FernetEncryptor(iterations=1000))
                   .set_password("")
                   .set_seed(seed))
        with pytest.raises(ConfigurationError):
            new_key_vault(options)

    def test_persists_seed_and_record(self, storage, seed):
        vault = new_key_vault(KeyVaultOptions().set_storage(storage).set_seed(seed))

        assert storage.securely_fetch_portfolio_seed() == seed
        assert storage.open_portfolio() == {
            "id": str(vault.id),
            "enableSimpleSigner": False,
            "indexMapper": {},
        }

    def test_simple_signer_flag(self, storage, seed):
        options = KeyVaultOptions().set_storage(storage).set_seed(seed).enable_simple_signer()
        vault = new_key_vault(options)
        assert vault.enable_simple_signer is True
        assert storage.open_portfolio()["enableSimpleSigner"] is True

    def test_restore_from_backup_seed(self, seed):
        original = new_key_vault(KeyVaultOptions().set_storage(MemoryStorage()).set_seed(seed))
        restored = new_key_vault(KeyVaultOptions().set_storage(MemoryStorage()).set_seed(seed))

        assert restored.id != original.id
        assert (restored.create_wallet("w").public_key()
                == original.create_wallet("w").public_key())


class TestOpenKeyVault:
    """Reopening a stored vault."""

    def test_reopen(self, storage, seed):
        vault = new_key_vault(KeyVaultOptions().set_storage(storage).set_seed(seed))
        wallet = vault.create_wallet("main")
        account = wallet.create_validator_account("a")

        reopened = open_key_vault(KeyVaultOptions().set_storage(storage))

        assert reopened.id == vault.id
        assert reopened.wallet_names() == ["main"]
        found = reopened.wallet_by_name("main").account_by_id(account.id)
        assert found.public_key() == account.public_key()

    def test_reopened_vault_continues_ordinals(self, storage, seed):
        vault = new_key_vault(KeyVaultOptions().set_storage(storage).set_seed(seed))
        vault.create_wallet("first")

        reopened = open_key_vault(KeyVaultOptions().set_storage(storage))
        second = reopened.create_wallet("second")

        assert second.path == "/1"
        assert second.public_key() == master_key_from_seed(seed).derive("/1").public_key()

    def test_missing_vault(self, storage):
        with pytest.raises(NotFoundError):
            open_key_vault(KeyVaultOptions().set_storage(storage))

    def test_requires_storage(self):
        with pytest.raises(ConfigurationError):
            open_key_vault(KeyVaultOptions())

    def test_open_encryptor_without_password(self, storage):
        options = KeyVaultOptions().set_storage(storage).set_encryptor(FernetEncryptor(iterations=1000))
        with pytest.raises(ConfigurationError):
            open_key_vault(options)

    def test_matching_vault_id(self, storage, seed):
        vault = new_key_vault(KeyVaultOptions().set_storage(storage).set_seed(seed))
        reopened = open_key_vault(KeyVaultOptions().set_storage(storage).set_vault_id(vault.id))
        assert reopened.id == vault.id

    def test_other_vault_id(self, storage, seed):
        new_key_vault(KeyVaultOptions().set_storage(storage).set_seed(seed))
        with pytest.raises(NotFoundError):
            open_key_vault(KeyVaultOptions().set_storage(storage).set_vault_id(uuid.uuid4()))

    def test_encrypted_round_trip(self, seed):
        storage = MemoryStorage()
        encryptor = FernetEncryptor(iterations=1000)
        new_key_vault(KeyVaultOptions()
                      .set_storage(storage)
                      .set_encryptor(encryptor)
                      .set_password("password")
                      .set_seed(seed)).create_wallet("w")

        reopened = open_key_vault(KeyVaultOptions()
                                  .set_storage(storage)
                                  .set_encryptor(encryptor)
                                  .set_password("password"))
        assert reopened.wallet_by_name("w").path == "/0"

    def test_encrypted_wrong_password(self, seed):
        storage = MemoryStorage()
        encryptor = FernetEncryptor(iterations=1000)
        new_key_vault(KeyVaultOptions()
                      .set_storage(storage)
                      .set_encryptor(encryptor)
                      .set_password("password")
                      .set_seed(seed))

        with pytest.raises(EncryptionError):
            open_key_vault(KeyVaultOptions()
                           .set_storage(storage)
                           .set_encryptor(encryptor)
                           .set_password("wrong"))


class TestSeedValidation:
    """Seed checks at derivation time."""

    def test_master_key_rejects_empty_seed(self):
        with pytest.raises(InvalidSeedError) as exc_info:
            master_key_from_seed(b"")
        assert exc_info.value.message == "seed can't be empty"

    def test_distinct_seeds_distinct_vault_keys(self):
        first = new_key_vault(KeyVaultOptions().set_storage(MemoryStorage()).set_seed(mk_seed(1)))
        second = new_key_vault(KeyVaultOptions().set_storage(MemoryStorage()).set_seed(mk_seed(2)))
        assert first.create_wallet("w").public_key() != second.create_wallet("w").public_key()
