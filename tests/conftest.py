"""
Shared fixtures for the key vault test-suite.
"""
import sys
import pathlib

import pytest

# Make the helpers package importable from every test directory
TESTS_DIR = pathlib.Path(__file__).parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from helpers.factories import mk_seed, mk_vault  # noqa: E402


@pytest.fixture
def seed():
    """Canonical 32-byte test seed (0x01..0x1f, 0xff)."""
    return mk_seed()


@pytest.fixture
def storage():
    """Fresh in-memory storage."""
    from keyvault import MemoryStorage
    return MemoryStorage()


@pytest.fixture
def vault(storage, seed):
    """Vault created over the in-memory storage fixture."""
    return mk_vault(storage, seed)


@pytest.fixture
def master_key(seed):
    """Master key derived from the canonical seed."""
    from keyvault import master_key_from_seed
    return master_key_from_seed(seed)
