"""Blind Birthday Attack: Tree Search vs Pairwise Comparison.

The oracle only says how many leading HMAC bits two messages share. A
naive attacker holding N messages must compare a new one against all N
of them, so finding the first collision costs about N^2/2 queries. The
tree search routes each candidate to its nearest neighbour in about
log2(N) queries instead.

We measure, for several digest widths:
1. Tree size at collision vs the birthday expectation sqrt(pi/2 * 2^W)
2. Oracle queries used vs the pairwise cost for the same tree size
3. Queries per insertion vs log2(tree size)
"""

import sys

import numpy as np
from scipy import stats

sys.path.insert(0, "src")

from blind_birthday.analysis.benchmark import run_benchmark
from blind_birthday.analysis.metrics import MetricExtractor

WIDTHS = [8, 16, 24]
N_TRIALS = 20
SEED = 2016


def main():
    print()
    print("=" * 78)
    print("  BLIND BIRTHDAY ATTACK: TREE SEARCH vs PAIRWISE COMPARISON")
    print("=" * 78)

    print(f"\n  Running {N_TRIALS} attacks at each width {WIDTHS}...")
    records = run_benchmark(WIDTHS, N_TRIALS, seed=SEED)
    report = MetricExtractor(records).full_report()

    # ================================================================
    # TEST 1: Tree size vs birthday bound
    # ================================================================
    print("\n  TEST 1: Tree size at collision vs birthday expectation")
    print(f"  {'W':>4}  {'tree size':>12}  {'expected':>12}  {'ratio':>6}")
    for w in WIDTHS:
        s = report[w]
        print(f"  {w:>4}  {s['tree_size_mean']:>12.1f}  "
              f"{s['expected_insertions']:>12.1f}  {s['birthday_ratio']:>6.2f}")

    # ================================================================
    # TEST 2: Queries vs pairwise cost
    # ================================================================
    print("\n  TEST 2: Oracle queries vs pairwise comparison")
    print(f"  {'W':>4}  {'queries':>12}  {'pairwise':>14}  {'speedup':>8}")
    for w in WIDTHS:
        s = report[w]
        n = s["tree_size_mean"] + 1
        pairwise = n * (n + 1) / 2
        print(f"  {w:>4}  {s['queries_mean']:>12.1f}  {pairwise:>14.1f}  "
              f"{pairwise / s['queries_mean']:>8.1f}x")

    # ================================================================
    # TEST 3: Queries per insertion grows like log2(N)
    # ================================================================
    print("\n  TEST 3: Queries per insertion vs log2(tree size)")
    sizes = np.array([r.tree_size + 1 for r in records], dtype=np.float64)
    per_insert = np.array([r.queries for r in records], dtype=np.float64) / sizes
    r_log, p_log = stats.pearsonr(np.log2(sizes), per_insert)
    print(f"  Pearson correlation: r = {r_log:.4f}, p = {p_log:.4g}")
    if r_log > 0.8 and p_log < 0.01:
        print("  Query cost per insertion tracks tree depth.")
    else:
        print("  No clear logarithmic trend at these widths.")

    print()
    print("=" * 78)


if __name__ == "__main__":
    main()
