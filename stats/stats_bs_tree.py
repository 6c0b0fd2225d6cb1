"""Statistics for binary search trees."""
# pylint: skip-file

import os
import logging
import math
import time
from typing import Dict, List, Optional, Tuple
from pprint import pprint
from dataclasses import asdict
from datetime import datetime
import numpy as np

from bs_trees.tree import (
    BinarySearchTree,
    bstree_stats_,
    Stats,
    TREE_FLAGS,
)


def assert_invariants(t: BinarySearchTree, stats: Stats) -> None:
    """Check all invariants, but only log ERROR messages on failures."""
    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            logging.error("Invariant failed: %s is False", flag)

    if not t.is_empty():
        if stats.node_count <= 0:
            logging.error(
                "Invariant failed: node_count=%d ≤ 0 for non-empty tree",
                stats.node_count
            )
        if stats.height <= 0:
            logging.error(
                "Invariant failed: height=%d ≤ 0 for non-empty tree",
                stats.height
            )
        if stats.least_key is None:
            logging.error(
                "Invariant failed: least_key is None for non-empty tree"
            )
        if stats.greatest_key is None:
            logging.error(
                "Invariant failed: greatest_key is None for non-empty tree"
            )


def random_keys(n: int, space: Optional[int] = None, rng: Optional[np.random.Generator] = None) -> List[int]:
    """Draw `n` distinct integer keys from range(space) in random order."""
    if rng is None:
        rng = np.random.default_rng()
    if space is None:
        space = max(4 * n, 1)
    if n > space:
        raise ValueError(f"cannot draw {n} distinct keys from a space of {space}")
    return [int(k) for k in rng.choice(space, size=n, replace=False)]


def random_bstree_of_size(
        n: int,
        space: Optional[int] = None,
        rng: Optional[np.random.Generator] = None
    ) -> BinarySearchTree:
    """
    Build a tree of exactly `n` items by inserting distinct random keys in
    random order. Each value is the string ``f"val_{key}"``.
    """
    tree = BinarySearchTree()
    for key in random_keys(n, space, rng):
        tree.insert(key, f"val_{key}")
    return tree


def check_keys_and_values(
    tree: BinarySearchTree,
    expected_keys: Optional[List[int]] = None
) -> Tuple[List[int], bool, bool, bool]:
    """
    Walk the tree in order and collect its keys.

    Returns:
        (keys, presence_ok, all_have_values, order_ok) where presence_ok is
        True when no expected_keys were given or the key sets match.
    """
    keys = []
    all_have_values = True
    order_ok = True

    prev_key = None
    for node in tree:
        key = node.key
        keys.append(key)
        if node.value is None:
            all_have_values = False
        if prev_key is not None and not prev_key < key:
            order_ok = False
        prev_key = key

    presence_ok = True
    if expected_keys is not None:
        if len(keys) != len(expected_keys):
            presence_ok = False
        else:
            presence_ok = set(keys) == set(expected_keys)

    return keys, presence_ok, all_have_values, order_ok


def churn(
        tree: BinarySearchTree,
        rounds: int,
        space: int,
        rng: np.random.Generator
    ) -> List[int]:
    """
    Remove a random present key and insert a random absent key, `rounds`
    times. The tree size is unchanged. Returns the height after each round.
    """
    present = [node.key for node in tree]
    present_set = set(present)
    heights = []
    if not present:
        return heights
    for _ in range(rounds):
        idx = int(rng.integers(len(present)))
        old_key = present[idx]
        tree.remove(old_key)
        present_set.discard(old_key)

        new_key = int(rng.integers(space))
        while new_key in present_set:
            new_key = int(rng.integers(space))
        tree.insert(new_key, f"val_{new_key}")
        present[idx] = new_key
        present_set.add(new_key)

        heights.append(tree.height())
    return heights


def churn_experiment(
        size: int,
        rounds: int,
        repetitions: int,
        seed: Optional[int] = None,
    ) -> Dict[str, float]:
    """
    Repeatedly builds random trees of `size` items, then churns them for
    `rounds` remove/insert cycles and records how the height drifts.
    Aggregates statistics and timings over all repetitions, logs them as a
    table and returns the averages.
    """
    t_all_0 = time.perf_counter()
    rng = np.random.default_rng(seed)
    space = max(8 * size, 16)

    initial_heights = []
    final_heights = []
    times_build = []
    times_churn = []

    for _ in range(repetitions):
        t0 = time.perf_counter()
        tree = random_bstree_of_size(size, space, rng)
        times_build.append(time.perf_counter() - t0)
        initial_heights.append(tree.height())

        t0 = time.perf_counter()
        heights = churn(tree, rounds, space, rng)
        times_churn.append(time.perf_counter() - t0)
        final_heights.append(heights[-1] if heights else tree.height())

        stats = bstree_stats_(tree)
        assert_invariants(tree, stats)
        logging.debug("Tree stats: %s", asdict(stats))

    # Perfect height: ceil(log2(size + 1))
    perfect_height = math.ceil(math.log2(size + 1)) if size > 0 else 0

    initial = np.asarray(initial_heights, dtype=float)
    final = np.asarray(final_heights, dtype=float)
    amp = final / perfect_height if perfect_height else np.zeros_like(final)

    rows = [
        ("Item count",           float(size),         None),
        ("Initial height",       initial.mean(),      initial.var()),
        ("Final height",         final.mean(),        final.var()),
        ("Perfect height",       perfect_height,      None),
        ("Height amplification", amp.mean(),          amp.var()),
    ]

    header = f"{'Metric':<22} {'Avg':>15} {'(Var)':>15}"
    sep_line = "-" * len(header)
    logging.info(header)
    logging.info(sep_line)
    for name, avg, var in rows:
        if var is None:
            logging.info(f"{name:<22} {avg:>15}")
        else:
            var_str = f"({var:.2f})"
            logging.info(f"{name:<22} {avg:15.2f} {var_str:>15}")

    build = np.asarray(times_build)
    churn_t = np.asarray(times_churn)
    logging.info("")
    logging.info("Performance summary:")
    logging.info(f"{'Build time (s)':<22}{build.mean():13.6f}{build.var():13.6f}{build.sum():13.6f}")
    logging.info(f"{'Churn time (s)':<22}{churn_t.mean():13.6f}{churn_t.var():13.6f}{churn_t.sum():13.6f}")
    logging.info(sep_line)
    logging.info("Execution time: %.3f seconds", time.perf_counter() - t_all_0)

    return {
        "initial_height": float(initial.mean()),
        "final_height": float(final.mean()),
        "perfect_height": float(perfect_height),
        "height_amplification": float(amp.mean()),
    }


if __name__ == "__main__":
    log_dir = os.path.join(os.getcwd(), "stats/logs")
    os.makedirs(log_dir, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = os.path.join(log_dir, f"run_{ts}.log")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="w"),
            logging.StreamHandler()
        ]
    )

    sizes = [1000]
    # sizes = [10, 100, 1000, 10_000]
    repetitions = 5

    for n in sizes:
        logging.info("")
        logging.info(f"---------------- NOW RUNNING EXPERIMENT: n = {n}, repetitions = {repetitions} ----------------")
        t0 = time.perf_counter()
        result = churn_experiment(size=n, rounds=10 * n, repetitions=repetitions)
        pprint(result)
        logging.info(f"Total experiment time: {time.perf_counter() - t0:.3f} seconds")
