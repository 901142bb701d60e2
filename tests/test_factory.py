import pytest

from tuplesketch.config import AppConfig, SketchSettings
from tuplesketch.errors import MissingHashFunction
from tuplesketch.sketches import SketchFactory


def _factory(**overrides: object) -> SketchFactory:
    settings = AppConfig.from_env().sketch
    if overrides:
        settings = SketchSettings.model_validate({**settings.model_dump(), **overrides})
    return SketchFactory(settings=settings)


def test_create_uses_configured_bucket_count() -> None:
    sketch = _factory().create()
    assert sketch.bucket_count == 10
    for i in range(25):
        sketch.add(i)
    assert sketch.estimate_cardinality() == 25
    assert sketch.counters == [3, 3, 3, 3, 3, 2, 2, 2, 2, 2]


def test_create_accepts_explicit_hash() -> None:
    sketch = _factory().create(lambda _: 7)
    sketch.add("anything")
    assert sketch.counters[7] == 1


@pytest.mark.parametrize("fmt", ["byte", "wide"])
def test_round_trip_through_configured_codec(fmt: str) -> None:
    factory = _factory(wire_format=fmt)
    sketch = factory.create()
    for i in range(40):
        sketch.add(i * 3)
    restored = factory.deserialize(factory.serialize(sketch))
    assert restored == sketch
    with pytest.raises(MissingHashFunction):
        restored.add(1)


def test_deserialize_with_bind_sizes_hash_to_payload() -> None:
    factory = _factory(hash_scheme="keyed")
    restored = factory.deserialize(bytes([4, 0, 0, 0, 0]), bind=True)
    assert restored.has_hash
    for i in range(20):
        restored.add(f"item-{i}")
    assert restored.estimate_cardinality() == 20
    assert restored.bucket_count == 4


def test_bind_refuses_empty_sketch() -> None:
    with pytest.raises(ValueError):
        _factory().deserialize(bytes([0]), bind=True)


def test_explicit_format_overrides_settings() -> None:
    factory = _factory(wire_format="byte")
    sketch = factory.create()
    sketch.add(1)
    payload = factory.serialize(sketch, fmt="wide")
    assert payload.startswith(b"TSKW")
    assert factory.deserialize(payload, fmt="wide") == sketch
