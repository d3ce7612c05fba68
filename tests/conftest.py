"""Shared fixtures: scripted oracles with controlled responses."""

from __future__ import annotations

import pytest

from blind_birthday.core.oracle import HMACOracle

FIXED_KEY = bytes(range(32))


class ScriptedOracle:
    """Oracle whose answers are given up front, keyed by unordered pair.

    Any query not in the script fails the test, so tests also pin down
    exactly which comparisons the engine makes.
    """

    def __init__(self, digest_bits: int, responses: dict | None = None, default: int | None = None) -> None:
        self.digest_bits = digest_bits
        self.responses = dict(responses or {})
        self.default = default
        self.calls: list[tuple[bytes, bytes]] = []

    def set(self, a: bytes, b: bytes, value: int) -> None:
        self.responses[(a, b)] = value

    def compare(self, a: bytes, b: bytes) -> int:
        self.calls.append((a, b))
        if (a, b) in self.responses:
            return self.responses[(a, b)]
        if (b, a) in self.responses:
            return self.responses[(b, a)]
        if a == b:
            return self.digest_bits
        if self.default is not None:
            return self.default
        raise AssertionError(f"Unscripted query {a!r} vs {b!r}")


@pytest.fixture
def scripted():
    """Factory for ScriptedOracle instances."""
    return ScriptedOracle


@pytest.fixture
def fixed_oracle():
    """Real HMAC oracle with a known key and a small width."""
    return HMACOracle(FIXED_KEY, digest_bits=16)
