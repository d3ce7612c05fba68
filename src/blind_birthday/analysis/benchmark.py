"""Repeated attack runs for measuring cost against digest width."""

from __future__ import annotations

import time
from collections.abc import Callable

import numpy as np

from blind_birthday.core.candidates import SeededMessageSource, SecureMessageSource
from blind_birthday.core.engine import CollisionSearchEngine
from blind_birthday.core.oracle import HMACOracle
from blind_birthday.utils.constants import MESSAGE_SIZE
from blind_birthday.utils.types import AttackConfig, TrialRecord


def build_engine(
    config: AttackConfig,
    on_progress: Callable | None = None,
    key: bytes | None = None,
) -> tuple[HMACOracle, CollisionSearchEngine]:
    """Oracle and engine for one run.

    With a seed, both the secret key and the candidate stream are drawn
    from it, so the whole run is reproducible. An explicit key wins over
    the seeded one.
    """
    if config.seed is not None:
        rng = np.random.default_rng(config.seed)
        seeded_key = rng.bytes(config.key_size)
        candidates = SeededMessageSource(
            int(rng.integers(0, 2**63 - 1)), config.message_size
        )
        if key is None:
            key = seeded_key
        oracle = HMACOracle(key, config.digest_bits, config.message_size)
    else:
        candidates = SecureMessageSource(config.message_size)
        oracle = HMACOracle(key, config.digest_bits, config.message_size)
    engine = CollisionSearchEngine(oracle, candidates, on_progress=on_progress)
    return oracle, engine


def run_trial(config: AttackConfig) -> TrialRecord:
    """One attack to completion (or to its caps)."""
    _, engine = build_engine(config)
    t0 = time.perf_counter()
    report = engine.run(config.max_insertions, config.max_queries)
    elapsed = time.perf_counter() - t0
    return TrialRecord(
        digest_bits=config.digest_bits,
        tree_size=report.tree_size,
        queries=report.queries,
        max_depth=engine.depth(),
        elapsed=elapsed,
        progress=list(engine.history),
    )


def run_benchmark(
    widths: list[int],
    trials: int,
    seed: int | None = None,
    message_size: int = MESSAGE_SIZE,
    on_trial: Callable[[TrialRecord], None] | None = None,
) -> list[TrialRecord]:
    """``trials`` attacks at each width.

    A base seed makes the batch reproducible; each trial gets its own
    derived seed.
    """
    if trials <= 0:
        raise ValueError(f"trials must be positive, got {trials}")
    seeds = np.random.SeedSequence(seed)
    records = []
    for width in widths:
        for child in seeds.spawn(trials):
            trial_seed = None
            if seed is not None:
                trial_seed = int(child.generate_state(1, dtype=np.uint64)[0]) >> 1
            config = AttackConfig(
                digest_bits=width, message_size=message_size, seed=trial_seed
            )
            record = run_trial(config)
            records.append(record)
            if on_trial is not None:
                on_trial(record)
    return records
