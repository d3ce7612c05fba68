"""Tests for the HMAC comparison oracle."""

import hashlib
import hmac

import pytest

from blind_birthday.core.errors import OracleFailure
from blind_birthday.core.oracle import HMACOracle
from blind_birthday.utils.bits import to_bits

KEY = bytes(range(32))
A = b"\x00" * 32
B = b"\xff" * 32


class TestConstruction:
    def test_defaults(self):
        oracle = HMACOracle(KEY)
        assert oracle.digest_bits == 32
        assert oracle.digest_size == 4
        assert oracle.message_size == 32

    def test_random_key_generated(self):
        o1 = HMACOracle()
        o2 = HMACOracle()
        assert o1.digest(A) != o2.digest(A) or o1.digest(B) != o2.digest(B)

    @pytest.mark.parametrize("bits", [0, -8, 12, 264])
    def test_invalid_width(self, bits):
        with pytest.raises(ValueError):
            HMACOracle(KEY, digest_bits=bits)

    def test_non_int_width(self):
        with pytest.raises(TypeError):
            HMACOracle(KEY, digest_bits=16.0)

    def test_bad_key(self):
        with pytest.raises(TypeError):
            HMACOracle("secret")
        with pytest.raises(ValueError):
            HMACOracle(b"")

    def test_repr_hides_key(self):
        assert KEY.hex() not in repr(HMACOracle(KEY))
        assert "digest_bits=32" in repr(HMACOracle(KEY))


class TestDigest:
    def test_truncated_hmac_sha256(self):
        oracle = HMACOracle(KEY, digest_bits=32)
        expected = hmac.new(KEY, A, hashlib.sha256).digest()[:4]
        assert oracle.digest(A) == expected

    def test_full_width(self):
        oracle = HMACOracle(KEY, digest_bits=256)
        assert len(oracle.digest(A)) == 32

    def test_wrong_length_fails(self):
        oracle = HMACOracle(KEY)
        with pytest.raises(OracleFailure):
            oracle.digest(b"short")

    def test_non_bytes_fails(self):
        oracle = HMACOracle(KEY)
        with pytest.raises(OracleFailure):
            oracle.compare("x" * 32, A)

    def test_any_length_when_unconstrained(self):
        oracle = HMACOracle(KEY, message_size=None)
        assert len(oracle.digest(b"hello")) == 4


class TestCompare:
    def test_identical_is_full_width(self):
        oracle = HMACOracle(KEY, digest_bits=24)
        assert oracle.compare(A, A) == 24

    def test_matches_bitwise_scan(self):
        oracle = HMACOracle(KEY, digest_bits=64)
        for i in range(20):
            a = bytes([i]) * 32
            b = bytes([i + 100]) * 32
            bits_a = to_bits(oracle.digest(a))
            bits_b = to_bits(oracle.digest(b))
            expected = next(
                (j for j in range(64) if bits_a[j] != bits_b[j]), 64
            )
            assert oracle.compare(a, b) == expected

    def test_symmetric(self):
        oracle = HMACOracle(KEY)
        assert oracle.compare(A, B) == oracle.compare(B, A)

    def test_deterministic(self):
        o1 = HMACOracle(KEY, digest_bits=16)
        o2 = HMACOracle(KEY, digest_bits=16)
        assert o1.compare(A, B) == o2.compare(A, B)

    def test_range(self):
        oracle = HMACOracle(KEY, digest_bits=8)
        for i in range(50):
            result = oracle.compare(bytes([i]) * 32, B)
            assert 0 <= result <= 8

    def test_counts_calls(self):
        oracle = HMACOracle(KEY)
        oracle.compare(A, B)
        oracle.compare(B, A)
        assert oracle.calls == 2

    def test_failure_not_counted(self):
        oracle = HMACOracle(KEY)
        with pytest.raises(OracleFailure):
            oracle.compare(A, b"")
        assert oracle.calls == 0
