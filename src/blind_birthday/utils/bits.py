"""Bit-level helpers and birthday-bound estimates."""

from __future__ import annotations

import math

import numpy as np


def first_mismatch_bit(a: bytes, b: bytes, width: int) -> int:
    """Index of the first differing bit of a and b, MSB first.

    Only the leading ``width`` bits are examined. Returns ``width`` when
    they all agree.
    """
    nbytes = (width + 7) // 8
    if len(a) < nbytes or len(b) < nbytes:
        raise ValueError(f"Need at least {nbytes} bytes to compare {width} bits")
    diff = int.from_bytes(a[:nbytes], "big") ^ int.from_bytes(b[:nbytes], "big")
    diff >>= nbytes * 8 - width
    if diff == 0:
        return width
    return width - diff.bit_length()


def to_bits(data: bytes, width: int | None = None) -> list[int]:
    """Return the bits of data (MSB first), optionally truncated."""
    bits = [int(b) for b in "".join(f"{byte:08b}" for byte in data)]
    return bits if width is None else bits[:width]


def expected_insertions(width: int) -> float:
    """Expected number of random draws before the first W-bit collision.

    sqrt(pi/2 * 2^W), the classical birthday expectation.
    """
    return math.sqrt(math.pi / 2.0 * 2.0**width)


def birthday_collision_probability(n: int, width: int) -> float:
    """Probability that n uniform W-bit values contain at least one collision."""
    if n < 2:
        return 0.0
    space = 2.0**width
    if n > space:
        return 1.0
    # log of prod_{i<n} (1 - i/space), summed in float64
    i = np.arange(n, dtype=np.float64)
    log_no_collision = float(np.sum(np.log1p(-i / space)))
    return float(-np.expm1(log_no_collision))
