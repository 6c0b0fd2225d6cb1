#!/usr/bin/env python3
"""
Benchmarks for the bs-trees data structure.

This script measures:
 1. Full tree build times (random_bstree_of_size)
 2. Stats collection on a large random tree
 3. Per-operation cost (get, insert, remove) on trees of various sizes
 4. Height drift under random remove/insert churn

Usage:
    python benchmarks.py [--space S] [--sizes 100 1000 10000] [--trials T] [--seed N]
"""
import argparse
import time
import gc
from pprint import pprint
from dataclasses import asdict
from statistics import mean, variance

import numpy as np

from stats_bs_tree import random_bstree_of_size, random_keys, churn_experiment
from bs_trees.tree import bstree_stats_, BinarySearchTree


def bench_build_tree(sizes: list[int], rng: np.random.Generator) -> None:
    """Measure random_bstree_of_size for various sizes."""
    for n in sizes:
        t0 = time.perf_counter()
        _ = random_bstree_of_size(n, rng=rng)
        elapsed = time.perf_counter() - t0
        print(f"[bench] random_bstree_of_size({n}): {elapsed:.4f}s")


def bench_tree_stats(n: int, rng: np.random.Generator) -> None:
    """Build a single random tree and print its stats."""
    tree = random_bstree_of_size(n, rng=rng)
    stats = bstree_stats_(tree)
    print(f"[bench] random_bstree_of_size({n}) stats:")
    pprint(asdict(stats))


def measure_single_ops(
        n: int,
        space: int,
        trials: int,
        rng: np.random.Generator
    ) -> dict[str, tuple[float, float]]:
    """
    Measure per-operation cost on trees of exactly `n` items, averaged over
    `trials` independent trees.
    Returns {operation: (mean_time_s, variance_time_s)}.
    """
    trees = [random_bstree_of_size(n, space, rng) for _ in range(trials)]
    present = [tree.min().key if not tree.is_empty() else None for tree in trees]

    # fresh keys, one per tree, not yet present
    fresh = []
    for tree in trees:
        key = random_keys(1, space, rng)[0]
        while key in tree:
            key = random_keys(1, space, rng)[0]
        fresh.append(key)

    results = {}
    gc.collect()
    gc.disable()
    try:
        times = []
        for tree, key in zip(trees, fresh):
            t0 = time.perf_counter()
            tree.get(key)
            times.append(time.perf_counter() - t0)
        results["get"] = (mean(times), variance(times))

        times = []
        for tree, key in zip(trees, fresh):
            t0 = time.perf_counter()
            tree.insert(key, f"val_{key}")
            times.append(time.perf_counter() - t0)
        results["insert"] = (mean(times), variance(times))

        times = []
        for tree, key in zip(trees, present):
            if key is None:
                continue
            t0 = time.perf_counter()
            tree.remove(key)
            times.append(time.perf_counter() - t0)
        if len(times) > 1:
            results["remove"] = (mean(times), variance(times))
    finally:
        gc.enable()

    return results


def bench_single_ops(sizes: list[int], space: int, trials: int, rng: np.random.Generator) -> None:
    """Run measure_single_ops for each size and print results."""
    for n in sizes:
        results = measure_single_ops(n, space, trials, rng)
        for op, (avg, var) in results.items():
            print(
                f"[bench] {op:<6} on size {n:<7} → avg {avg*1e6:8.2f} µs   σ²={var*1e12:8.2f} µs²"
            )


def main():
    parser = argparse.ArgumentParser(description="BinarySearchTree benchmarks")
    parser.add_argument("--space", type=int, default=1 << 24,
                        help="Key space for random keys")
    parser.add_argument("--sizes", nargs='+', type=int, default=[100, 1000, 10_000],
                        help="Tree sizes for single-operation benchmarks")
    parser.add_argument("--trials", type=int, default=100,
                        help="Number of trials for single-operation benchmarks")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the random generator")
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)
    BinarySearchTree.enable_performance_tracking()

    print("\n=== Full Tree Build ===")
    bench_build_tree([10, 100, 1000, 10_000, 100_000], rng)

    print("\n=== Random Tree Stats ===")
    bench_tree_stats(100_000, rng)

    print("\n=== Single-Operation Benchmarks ===")
    bench_single_ops(args.sizes, args.space, args.trials, rng)

    print("\n=== Churn Height Drift ===")
    pprint(churn_experiment(size=1000, rounds=10_000, repetitions=3, seed=args.seed))

    print("\n=== Method-Level Performance Breakdown ===")
    print(BinarySearchTree.get_performance_report())
    BinarySearchTree.reset_performance_metrics()
    BinarySearchTree.disable_performance_tracking()


if __name__ == "__main__":
    main()
