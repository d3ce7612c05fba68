"""Sources of fresh candidate messages for the search engine."""

from __future__ import annotations

import secrets
from collections.abc import Iterable, Iterator

import numpy as np

from blind_birthday.utils.constants import MESSAGE_SIZE


def random_message(size: int = MESSAGE_SIZE) -> bytes:
    """A uniformly random message from the OS CSPRNG."""
    return secrets.token_bytes(size)


class SecureMessageSource:
    """Endless supply of cryptographically random messages."""

    def __init__(self, size: int = MESSAGE_SIZE) -> None:
        if size <= 0:
            raise ValueError(f"Message size must be positive, got {size}")
        self.size = size

    def __iter__(self) -> Iterator[bytes]:
        while True:
            yield random_message(self.size)


class SeededMessageSource:
    """Reproducible message supply driven by a numpy Generator.

    Two sources built with the same seed and size yield the same
    sequence, which makes whole attack runs repeatable.
    """

    def __init__(self, seed: int | None = None, size: int = MESSAGE_SIZE) -> None:
        if size <= 0:
            raise ValueError(f"Message size must be positive, got {size}")
        self.seed = seed
        self.size = size

    def __iter__(self) -> Iterator[bytes]:
        rng = np.random.default_rng(self.seed)
        while True:
            yield rng.bytes(self.size)


class SequenceMessageSource:
    """Replays a fixed list of messages, then stops."""

    def __init__(self, messages: Iterable[bytes]) -> None:
        self.messages = [bytes(m) for m in messages]

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.messages)
