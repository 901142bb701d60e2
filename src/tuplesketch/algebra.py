"""Elementwise set algebra over counter sketches.

Each operator allocates a fresh sketch and leaves both operands untouched.
The result inherits the left operand's hash function, which may be ``None``
for sketches restored from bytes.
"""

from __future__ import annotations

from collections.abc import Callable

from .errors import DimensionMismatch
from .sketches.counter_impl import CounterSketch


def smaller(left: int, right: int) -> int:
    return left if left < right else right


def larger(left: int, right: int) -> int:
    return left if left > right else right


def _combine(a: CounterSketch, b: CounterSketch, op: Callable[[int, int], int]) -> CounterSketch:
    if a.bucket_count != b.bucket_count:
        raise DimensionMismatch(a.bucket_count, b.bucket_count)
    merged = [op(x, y) for x, y in zip(a.counters, b.counters, strict=True)]
    return CounterSketch._from_counters(merged, a.hash_function)


def union(a: CounterSketch, b: CounterSketch) -> CounterSketch:
    """Per-bucket sum. Not a deduplicated set union: 100 + 50 adds gives 150."""
    return _combine(a, b, lambda x, y: x + y)


def intersection(a: CounterSketch, b: CounterSketch) -> CounterSketch:
    """Per-bucket minimum."""
    return _combine(a, b, smaller)


def a_not_b(a: CounterSketch, b: CounterSketch) -> CounterSketch:
    """Per-bucket difference clamped at zero."""
    return _combine(a, b, lambda x, y: larger(0, x - y))
