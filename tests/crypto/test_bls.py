"""
BLS key type tests.
"""

import pytest

from keyvault import BLSPrivateKey, BLSPublicKey, InvalidKeyError
from keyvault.crypto import CURVE_ORDER


class TestBLSPrivateKey:
    """Private key construction and encoding."""

    def test_bytes_round_trip(self):
        key = BLSPrivateKey(123456789)
        assert len(key.to_bytes()) == 32
        assert BLSPrivateKey.from_bytes(key.to_bytes()) == key
        assert BLSPrivateKey.from_hex(key.to_hex()) == key

    @pytest.mark.parametrize("scalar", [0, CURVE_ORDER, CURVE_ORDER + 1, -5])
    def test_scalar_out_of_range(self, scalar):
        with pytest.raises(InvalidKeyError):
            BLSPrivateKey(scalar)

    def test_wrong_length(self):
        with pytest.raises(InvalidKeyError):
            BLSPrivateKey.from_bytes(b"\x01" * 31)

    def test_bad_hex(self):
        with pytest.raises(InvalidKeyError):
            BLSPrivateKey.from_hex("not hex")

    def test_public_key_is_compressed_g1(self):
        public_key = BLSPrivateKey(1).public_key()
        assert len(public_key.to_bytes()) == 48
        # Compressed generator of G1
        assert public_key.to_hex().startswith("97f1d3a73197d794")

    def test_repr_hides_secret(self):
        key = BLSPrivateKey(987654321)
        assert key.to_hex() not in repr(key)


class TestBLSPublicKey:
    """Public key encoding and verification."""

    def test_wrong_length(self):
        with pytest.raises(InvalidKeyError):
            BLSPublicKey(b"\x00" * 47)

    def test_hex_round_trip(self):
        public_key = BLSPrivateKey(42).public_key()
        assert BLSPublicKey.from_hex(public_key.to_hex()) == public_key

    def test_sign_and_verify(self):
        key = BLSPrivateKey(424242)
        message = b"attestation"
        signature = key.sign(message)

        assert len(signature) == 96
        assert key.public_key().verify(signature, message)
        assert not key.public_key().verify(signature, b"other message")

    def test_verify_rejects_short_signature(self):
        assert not BLSPrivateKey(7).public_key().verify(b"\x00" * 95, b"msg")
