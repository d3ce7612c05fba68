"""Keyed comparison oracle: leaks how many leading HMAC bits two inputs share."""

from __future__ import annotations

import hmac
import secrets
from typing import Protocol

from blind_birthday.core.errors import OracleFailure
from blind_birthday.utils.bits import first_mismatch_bit
from blind_birthday.utils.constants import (
    DEFAULT_DIGEST_BITS,
    DIGEST_ALGORITHM,
    KEY_SIZE,
    MAX_DIGEST_BITS,
    MESSAGE_SIZE,
)


class Oracle(Protocol):
    """Anything the search engine can query."""

    digest_bits: int

    def compare(self, a: bytes, b: bytes) -> int: ...


class HMACOracle:
    """HMAC-SHA256 oracle under a secret key.

    Given two messages, HMACs both and reports the index of the first
    mismatching bit of the truncated digests, or ``digest_bits`` when the
    observed prefix matches completely. The key stays inside the instance.
    """

    def __init__(
        self,
        key: bytes | None = None,
        digest_bits: int = DEFAULT_DIGEST_BITS,
        message_size: int | None = MESSAGE_SIZE,
    ) -> None:
        if not isinstance(digest_bits, int) or isinstance(digest_bits, bool):
            raise TypeError(f"digest_bits must be int, got {type(digest_bits).__name__}")
        if digest_bits <= 0 or digest_bits % 8 != 0 or digest_bits > MAX_DIGEST_BITS:
            raise ValueError(
                f"digest_bits must be a multiple of 8 in [8, {MAX_DIGEST_BITS}], "
                f"got {digest_bits}"
            )
        if key is None:
            key = secrets.token_bytes(KEY_SIZE)
        elif not isinstance(key, bytes):
            raise TypeError(f"Key must be bytes, got {type(key).__name__}")
        elif len(key) == 0:
            raise ValueError("Key must not be empty")

        self._key = key
        self.digest_bits = digest_bits
        self.message_size = message_size
        self.calls: int = 0

    @property
    def digest_size(self) -> int:
        """Truncated digest length in bytes."""
        return self.digest_bits // 8

    def _check(self, message: bytes) -> None:
        if not isinstance(message, (bytes, bytearray)):
            raise OracleFailure(f"Message must be bytes, got {type(message).__name__}")
        if self.message_size is not None and len(message) != self.message_size:
            raise OracleFailure(
                f"Message must be exactly {self.message_size} bytes, got {len(message)}"
            )

    def digest(self, message: bytes) -> bytes:
        """Truncated HMAC of a message."""
        self._check(message)
        full = hmac.new(self._key, bytes(message), DIGEST_ALGORITHM).digest()
        return full[: self.digest_size]

    def compare(self, a: bytes, b: bytes) -> int:
        """First mismatching bit index of HMAC(a) and HMAC(b), MSB first.

        Returns ``digest_bits`` if all observed bits agree. The only state
        touched is ``calls``, an instrumentation counter of completed
        comparisons; the answer never depends on it.
        """
        h1 = self.digest(a)
        h2 = self.digest(b)
        self.calls += 1
        return first_mismatch_bit(h1, h2, self.digest_bits)

    @staticmethod
    def random(
        digest_bits: int = DEFAULT_DIGEST_BITS,
        message_size: int | None = MESSAGE_SIZE,
    ) -> HMACOracle:
        """Oracle under a fresh random key."""
        return HMACOracle(secrets.token_bytes(KEY_SIZE), digest_bits, message_size)

    def __repr__(self) -> str:
        return f"HMACOracle(digest_bits={self.digest_bits}, message_size={self.message_size})"
