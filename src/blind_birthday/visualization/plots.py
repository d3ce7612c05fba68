"""Matplotlib-based 2D plots for attack analysis."""

from __future__ import annotations

import os

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend by default

import matplotlib.pyplot as plt
import numpy as np
from numpy.typing import NDArray

from blind_birthday.utils.bits import expected_insertions
from blind_birthday.utils.types import ProgressEvent


class PlotSuite:
    """Matplotlib-based 2D plots for blind birthday runs."""

    def __init__(self, save_dir: str = "~/Desktop") -> None:
        self.save_dir = os.path.expanduser(save_dir)

    def _save_or_show(
        self, fig: plt.Figure, name: str, show: bool, save: bool
    ) -> plt.Figure:
        if save:
            os.makedirs(self.save_dir, exist_ok=True)
            path = os.path.join(self.save_dir, f"bb_{name}.png")
            fig.savefig(path, dpi=150, bbox_inches="tight")
        if show:
            plt.show()
        else:
            plt.close(fig)
        return fig

    def progress_timeline(
        self,
        events: list[ProgressEvent],
        digest_bits: int | None = None,
        show: bool = False,
        save: bool = True,
    ) -> plt.Figure:
        """Closest match observed against tree size at the time."""
        if not events:
            fig, ax = plt.subplots()
            ax.text(0.5, 0.5, "No data", ha="center", va="center")
            return self._save_or_show(fig, "progress", show, save)

        sizes = [max(e.tree_size, 1) for e in events]
        closest = [e.closest_match for e in events]

        fig, ax = plt.subplots(figsize=(12, 6))
        ax.step(sizes, closest, where="post", color="blue", marker="o")
        if digest_bits is not None:
            ax.axhline(y=digest_bits, color="red", linestyle="--", alpha=0.5,
                       label=f"Full match ({digest_bits} bits)")
            ax.axvline(x=expected_insertions(digest_bits), color="green",
                       linestyle=":", alpha=0.5, label="Birthday expectation")
            ax.legend()
        ax.set_xscale("log", base=2)
        ax.set_xlabel("Tree size")
        ax.set_ylabel("Closest match (bits)")
        ax.set_title("Closest Collision So Far")
        ax.grid(True, alpha=0.3)

        return self._save_or_show(fig, "progress", show, save)

    def depth_histogram(
        self,
        histogram: NDArray[np.int64],
        show: bool = False,
        save: bool = True,
    ) -> plt.Figure:
        """Node count per tree depth."""
        fig, ax = plt.subplots(figsize=(12, 6))
        depths = np.arange(len(histogram))
        ax.bar(depths, histogram, color="steelblue")
        ax.set_xlabel("Depth")
        ax.set_ylabel("Nodes")
        ax.set_title("Search Tree Depth Distribution")
        ax.grid(True, alpha=0.3)

        return self._save_or_show(fig, "depth_histogram", show, save)

    def query_scaling(
        self,
        report: dict[int, dict],
        show: bool = False,
        save: bool = True,
    ) -> plt.Figure:
        """Mean queries and tree size per digest width, log2 scale.

        ``report`` is the output of MetricExtractor.full_report().
        """
        widths = sorted(w for w, s in report.items() if s["trials"] > 0)
        fig, ax = plt.subplots(figsize=(12, 6))
        if not widths:
            ax.text(0.5, 0.5, "No data", ha="center", va="center")
            return self._save_or_show(fig, "query_scaling", show, save)

        queries = [report[w]["queries_mean"] for w in widths]
        sizes = [max(report[w]["tree_size_mean"], 1.0) for w in widths]
        expected = [expected_insertions(w) for w in widths]

        ax.plot(widths, queries, marker="o", label="Oracle queries")
        ax.plot(widths, sizes, marker="x", label="Tree size")
        ax.plot(widths, expected, linestyle="--", color="gray",
                label="sqrt(pi/2 * 2^W)")
        ax.set_yscale("log", base=2)
        ax.set_xlabel("Digest width W (bits)")
        ax.set_ylabel("Count")
        ax.set_title("Blind Birthday Attack Cost vs Digest Width")
        ax.legend()
        ax.grid(True, alpha=0.3)

        return self._save_or_show(fig, "query_scaling", show, save)
