"""Experiments and benchmarks for binary search trees."""
