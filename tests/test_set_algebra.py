import random

import pytest

from tuplesketch.algebra import a_not_b, intersection, larger, smaller, union
from tuplesketch.errors import DimensionMismatch
from tuplesketch.hashing import modulo_hash
from tuplesketch.serializer import deserialize
from tuplesketch.sketches import CounterSketch


def _filled(n_adds: int, seed: int, buckets: int = 10) -> CounterSketch:
    rng = random.Random(seed)
    sketch = CounterSketch(buckets, modulo_hash(buckets))
    for _ in range(n_adds):
        sketch.add(rng.randrange(buckets))
    return sketch


def test_comparison_helpers() -> None:
    assert smaller(3, 5) == 3
    assert smaller(5, 3) == 3
    assert larger(3, 5) == 5
    assert larger(0, -4) == 0


def test_union_is_elementwise_sum() -> None:
    a = _filled(100, seed=1)
    b = _filled(50, seed=2)
    result = union(a, b)
    assert result.estimate_cardinality() == 150
    assert result.counters == [x + y for x, y in zip(a.counters, b.counters)]
    assert union(b, a) == result


def test_intersection_is_elementwise_min() -> None:
    a = _filled(100, seed=3)
    b = _filled(50, seed=4)
    result = intersection(a, b)
    assert result.counters == [min(x, y) for x, y in zip(a.counters, b.counters)]
    assert intersection(b, a) == result
    assert intersection(a, a) == a


def test_a_not_b_is_clamped_difference() -> None:
    a = _filled(50, seed=5)
    b = _filled(100, seed=6)
    result = a_not_b(a, b)
    assert result.counters == [max(0, x - y) for x, y in zip(a.counters, b.counters)]
    assert all(value >= 0 for value in result.counters)
    assert a_not_b(a, a).counters == [0] * 10


def test_operators_do_not_mutate_operands() -> None:
    a = _filled(30, seed=7)
    b = _filled(20, seed=8)
    before_a, before_b = a.counters, b.counters
    for op in (union, intersection, a_not_b):
        result = op(a, b)
        result.add(0)
        assert a.counters == before_a
        assert b.counters == before_b


def test_repeated_invocation_is_deterministic() -> None:
    a = _filled(40, seed=9)
    b = _filled(40, seed=10)
    for op in (union, intersection, a_not_b):
        first = op(a, b)
        second = op(a, b)
        assert first == second
        assert first is not second


def test_result_takes_left_hash_function() -> None:
    a = _filled(5, seed=11)
    b = CounterSketch(10, lambda x: 0)
    result = union(a, b)
    assert result.hash_function is a.hash_function
    restored = deserialize(bytes([10] + [1] * 10))
    assert union(restored, a).hash_function is None


@pytest.mark.parametrize("op", [union, intersection, a_not_b])
def test_dimension_mismatch(op) -> None:
    a = CounterSketch(10, modulo_hash(10))
    b = CounterSketch(12, modulo_hash(12))
    with pytest.raises(DimensionMismatch) as info:
        op(a, b)
    assert isinstance(info.value, ValueError)
    assert (info.value.left, info.value.right) == (10, 12)


def test_method_forms_delegate() -> None:
    a = _filled(20, seed=12)
    b = _filled(10, seed=13)
    assert a.union(b) == union(a, b)
    assert a.intersection(b) == intersection(a, b)
    assert a.a_not_b(b) == a_not_b(a, b)


def test_method_forms_reject_foreign_operands() -> None:
    a = _filled(5, seed=14)
    with pytest.raises(TypeError):
        a.union([0] * 10)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        a.a_not_b(object())  # type: ignore[arg-type]
