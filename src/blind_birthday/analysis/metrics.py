"""Resource metrics over repeated attack runs."""

from __future__ import annotations

from collections import defaultdict

import numpy as np
from scipy import stats

from blind_birthday.utils.bits import expected_insertions
from blind_birthday.utils.types import TrialRecord


class MetricExtractor:
    """Summarize query and tree-size costs of a batch of attacks.

    Records are grouped by digest width so that several widths can be
    compared against the birthday expectation in one report.
    """

    def __init__(self, records: list[TrialRecord]) -> None:
        self.records = records

    def widths(self) -> list[int]:
        return sorted({r.digest_bits for r in self.records})

    def _by_width(self) -> dict[int, list[TrialRecord]]:
        grouped: dict[int, list[TrialRecord]] = defaultdict(list)
        for r in self.records:
            grouped[r.digest_bits].append(r)
        return grouped

    def width_stats(self, digest_bits: int, alpha: float = 0.95) -> dict:
        """Statistics for all trials at one width.

        Includes a Student-t confidence interval on the mean query count
        and the ratio of observed tree size to sqrt(pi/2 * 2^W).
        """
        trials = self._by_width().get(digest_bits, [])
        expected = expected_insertions(digest_bits)
        if not trials:
            return {
                "trials": 0,
                "queries_mean": 0.0,
                "queries_std": 0.0,
                "tree_size_mean": 0.0,
                "expected_insertions": expected,
                "birthday_ratio": 0.0,
                "queries_per_insertion": 0.0,
            }

        queries = np.array([r.queries for r in trials], dtype=np.float64)
        sizes = np.array([r.tree_size for r in trials], dtype=np.float64)
        depths = np.array([r.max_depth for r in trials], dtype=np.float64)

        if len(trials) > 1 and np.std(queries) > 0:
            lo, hi = stats.t.interval(
                alpha, len(trials) - 1, loc=np.mean(queries), scale=stats.sem(queries)
            )
        else:
            lo = hi = float(np.mean(queries))

        # Each insertion, plus the colliding candidate, costs at least one query
        inserted = np.maximum(sizes + 1.0, 1.0)

        return {
            "trials": len(trials),
            "queries_mean": float(np.mean(queries)),
            "queries_std": float(np.std(queries)),
            "queries_median": float(np.median(queries)),
            "queries_ci": (float(lo), float(hi)),
            "tree_size_mean": float(np.mean(sizes)),
            "tree_size_std": float(np.std(sizes)),
            "max_depth_mean": float(np.mean(depths)),
            "expected_insertions": expected,
            "birthday_ratio": float(np.mean(sizes) / expected),
            "queries_per_insertion": float(np.mean(queries / inserted)),
        }

    def full_report(self) -> dict:
        """Statistics for every width present."""
        return {w: self.width_stats(w) for w in self.widths()}
