"""Dataclass definitions for the blind birthday attack."""

from __future__ import annotations

from dataclasses import dataclass, field

from blind_birthday.utils.constants import (
    DEFAULT_DIGEST_BITS,
    KEY_SIZE,
    MESSAGE_SIZE,
)


@dataclass
class AttackConfig:
    """Configuration for an attack run."""

    digest_bits: int = DEFAULT_DIGEST_BITS
    message_size: int = MESSAGE_SIZE
    key_size: int = KEY_SIZE
    seed: int | None = None
    max_insertions: int | None = None
    max_queries: int | None = None

    def __post_init__(self) -> None:
        if self.digest_bits <= 0 or self.digest_bits % 8 != 0:
            raise ValueError(
                f"digest_bits must be a positive multiple of 8, got {self.digest_bits}"
            )
        if self.message_size <= 0:
            raise ValueError(f"message_size must be positive, got {self.message_size}")
        if self.key_size <= 0:
            raise ValueError(f"key_size must be positive, got {self.key_size}")


@dataclass(frozen=True)
class ProgressEvent:
    """Emitted whenever the closest match seen so far improves."""

    closest_match: int
    tree_size: int
    queries: int


@dataclass(frozen=True)
class CollisionReport:
    """A full-width collision between two distinct messages."""

    tree_size: int
    queries: int
    message1: bytes
    message2: bytes

    def as_dict(self) -> dict:
        return {
            "tree_size": self.tree_size,
            "queries": self.queries,
            "message1": self.message1.hex(),
            "message2": self.message2.hex(),
        }


@dataclass
class TrialRecord:
    """Outcome of one benchmark attack at a given digest width."""

    digest_bits: int
    tree_size: int
    queries: int
    max_depth: int = 0
    elapsed: float = 0.0
    progress: list[ProgressEvent] = field(default_factory=list)
