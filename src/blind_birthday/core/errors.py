"""Exceptions raised by the oracle adapter and the search engine."""

from __future__ import annotations


class BlindBirthdayError(Exception):
    """Base class for attack errors."""


class OracleFailure(BlindBirthdayError):
    """The oracle could not compute or compare digests for its inputs."""


class DegenerateCandidate(BlindBirthdayError):
    """A candidate is byte-identical to a message already in the tree."""

    def __init__(self, message: bytes) -> None:
        super().__init__(f"Candidate {message.hex()[:16]}... is already in the tree")
        self.message = message


class SearchExhausted(BlindBirthdayError):
    """The search stopped before finding a collision.

    Raised when a caller-imposed insertion or query cap is reached, or
    when the candidate supply runs dry.
    """

    def __init__(self, reason: str, tree_size: int, queries: int, closest: int) -> None:
        super().__init__(
            f"{reason} (tree size {tree_size}, {queries} queries, closest match {closest})"
        )
        self.reason = reason
        self.tree_size = tree_size
        self.queries = queries
        self.closest = closest
