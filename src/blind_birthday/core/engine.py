"""Collision search engine for the blind birthday attack.

Messages are organized in a binary tree keyed by how far their digests
agree. A node at depth d is only ever compared against candidates that
already match it on the first d bits, so the oracle's answer tells us
whether bit d also matches (go right) or not (go left). Each insertion
costs roughly one query per level instead of one per stored message, and
a full W-bit match between two distinct messages ends the search near
the birthday bound of about 2^(W/2) insertions.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from blind_birthday.core.candidates import SecureMessageSource
from blind_birthday.core.errors import DegenerateCandidate, SearchExhausted
from blind_birthday.core.oracle import Oracle
from blind_birthday.utils.constants import MESSAGE_SIZE
from blind_birthday.utils.types import CollisionReport, ProgressEvent


class SearchState(enum.Enum):
    EMPTY = "empty"
    SEARCHING = "searching"
    COLLISION_FOUND = "collision_found"


@dataclass(eq=False)
class TrieNode:
    """One stored message.

    ``left`` holds candidates whose next compared bit differs from this
    node's digest, ``right`` those whose next bit matches.
    """

    message: bytes
    left: TrieNode | None = None
    right: TrieNode | None = None


class CollisionSearchEngine:
    """Insert random messages into a prefix tree until two collide.

    The engine owns the tree and every counter. It talks to the oracle
    through ``compare`` only and never sees the key or a digest.
    """

    def __init__(
        self,
        oracle: Oracle,
        candidates: Iterable[bytes] | None = None,
        on_progress: Callable[[ProgressEvent], None] | None = None,
    ) -> None:
        self.oracle = oracle
        self.width: int = oracle.digest_bits
        if candidates is None:
            size = getattr(oracle, "message_size", None) or MESSAGE_SIZE
            candidates = SecureMessageSource(size)
        self._candidates: Iterator[bytes] = iter(candidates)
        self.on_progress = on_progress

        self.state = SearchState.EMPTY
        self.root: TrieNode | None = None
        self.queries: int = 0
        self.tree_size: int = 0
        self.closest: int = 0
        self.report: CollisionReport | None = None
        self.history: list[ProgressEvent] = []

    @property
    def node_count(self) -> int:
        """Messages stored in the tree, root included."""
        return 0 if self.root is None else self.tree_size + 1

    def _draw(self) -> bytes:
        try:
            return bytes(next(self._candidates))
        except StopIteration:
            raise SearchExhausted(
                "Candidate supply exhausted", self.tree_size, self.queries, self.closest
            ) from None

    def initialize(self, root_message: bytes | None = None) -> None:
        """Start a fresh tree rooted at one message. No oracle query is made."""
        if root_message is None:
            root_message = self._draw()
        self.root = TrieNode(bytes(root_message))
        self.queries = 0
        self.tree_size = 0
        self.closest = 0
        self.report = None
        self.history = []
        self.state = SearchState.SEARCHING

    def insert_candidate(self, message: bytes) -> CollisionReport | None:
        """Walk the tree with one candidate.

        Returns a CollisionReport if the candidate fully matches a distinct
        stored message, otherwise attaches it as a new leaf and returns None.

        Raises:
            RuntimeError: if the engine is not searching.
            DegenerateCandidate: if the candidate is already in the tree.
        """
        if self.state is not SearchState.SEARCHING:
            raise RuntimeError(f"Cannot insert in state {self.state.name}")
        if self.root is None:
            raise RuntimeError("Search tree has no root")

        message = bytes(message)
        current = self.root
        # Bits known to match between current's digest and the candidate's
        matching = 0

        while True:
            this_match = self.oracle.compare(current.message, message)
            self.queries += 1

            if this_match > self.closest:
                self.closest = this_match
                event = ProgressEvent(this_match, self.tree_size, self.queries)
                self.history.append(event)
                if self.on_progress is not None:
                    self.on_progress(event)

            if this_match == self.width:
                if current.message != message:
                    self.state = SearchState.COLLISION_FOUND
                    self.report = CollisionReport(
                        tree_size=self.tree_size,
                        queries=self.queries,
                        message1=current.message,
                        message2=message,
                    )
                    return self.report
                raise DegenerateCandidate(message)

            # Strict >: any answer beyond the depth already guaranteed by
            # the path means bit `matching` agrees too.
            if this_match > matching:
                if current.right is None:
                    current.right = TrieNode(message)
                    self.tree_size += 1
                    return None
                current = current.right
            else:
                if current.left is None:
                    current.left = TrieNode(message)
                    self.tree_size += 1
                    return None
                current = current.left

            matching += 1

    def step(self) -> CollisionReport | None:
        """Draw candidates until one is inserted or collides.

        Candidates already present in the tree are discarded.
        """
        while True:
            try:
                return self.insert_candidate(self._draw())
            except DegenerateCandidate:
                continue

    def run(
        self,
        max_insertions: int | None = None,
        max_queries: int | None = None,
    ) -> CollisionReport:
        """Search until a collision is found.

        Caps are checked between insertions, so a run may finish the
        insertion that crosses ``max_queries``.

        Raises:
            SearchExhausted: if a cap is reached or the candidates run out.
        """
        if self.state is SearchState.EMPTY:
            self.initialize()
        if self.report is not None:
            return self.report

        while True:
            if max_insertions is not None and self.tree_size >= max_insertions:
                raise SearchExhausted(
                    f"Insertion cap {max_insertions} reached",
                    self.tree_size, self.queries, self.closest,
                )
            if max_queries is not None and self.queries >= max_queries:
                raise SearchExhausted(
                    f"Query cap {max_queries} reached",
                    self.tree_size, self.queries, self.closest,
                )
            report = self.step()
            if report is not None:
                return report

    # -- Inspection --

    def iter_nodes(self) -> Iterator[tuple[int, TrieNode]]:
        """Pre-order (depth, node) pairs, left subtree before right."""
        if self.root is None:
            return
        stack: list[tuple[int, TrieNode]] = [(0, self.root)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            if node.right is not None:
                stack.append((depth + 1, node.right))
            if node.left is not None:
                stack.append((depth + 1, node.left))

    def depth(self) -> int:
        """Depth of the deepest node (root is 0); -1 for an empty tree."""
        return max((d for d, _ in self.iter_nodes()), default=-1)

    def depth_histogram(self) -> NDArray[np.int64]:
        """Number of nodes at each depth."""
        depths = np.array([d for d, _ in self.iter_nodes()], dtype=np.int64)
        if depths.size == 0:
            return np.zeros(0, dtype=np.int64)
        return np.bincount(depths).astype(np.int64)

    def snapshot(self) -> dict:
        """Current counters."""
        return {
            "state": self.state.value,
            "tree_size": self.tree_size,
            "queries": self.queries,
            "closest": self.closest,
            "depth": self.depth(),
        }
