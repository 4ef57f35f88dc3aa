from .mocks import FailingStorage, FlakyWalletStorage
from .factories import mk_seed, byte_array, TEST_SEED_HEX

__all__ = [
    "FailingStorage",
    "FlakyWalletStorage",
    "mk_seed",
    "byte_array",
    "TEST_SEED_HEX",
]
