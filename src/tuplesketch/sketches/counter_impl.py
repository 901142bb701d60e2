"""Fixed-width counter sketch with an injected hash function."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from ..errors import MissingHashFunction
from ..hashing import HashFunction, check_bucket

logger = logging.getLogger(__name__)


class CounterSketch:
    """Array of per-bucket counters fed through a caller-supplied hash.

    ``estimate_cardinality`` is the exact number of ``add`` calls made on the
    sketch, not a statistical estimate. The hash function is held as a plain
    callable; sketches restored from bytes start without one and must be given
    one through :meth:`bind_hash` before they accept new items.
    """

    __slots__ = ("_bucket_count", "_counters", "_hash")

    def __init__(self, bucket_count: int, hash_function: HashFunction) -> None:
        if bucket_count < 1:
            raise ValueError(f"bucket_count must be positive, got {bucket_count}")
        if not callable(hash_function):
            raise TypeError("hash_function must be callable")
        self._bucket_count = bucket_count
        self._counters = [0] * bucket_count
        self._hash: HashFunction | None = hash_function

    @classmethod
    def _from_counters(
        cls,
        counters: Iterable[int],
        hash_function: HashFunction | None = None,
    ) -> CounterSketch:
        """Wrap an already-built counter list without copying through ``add``."""
        inst = cls.__new__(cls)
        inst._counters = list(counters)
        inst._bucket_count = len(inst._counters)
        inst._hash = hash_function
        return inst

    @property
    def bucket_count(self) -> int:
        return self._bucket_count

    @property
    def counters(self) -> list[int]:
        return list(self._counters)

    @property
    def hash_function(self) -> HashFunction | None:
        return self._hash

    @property
    def has_hash(self) -> bool:
        return self._hash is not None

    def bind_hash(self, hash_function: HashFunction) -> CounterSketch:
        if not callable(hash_function):
            raise TypeError("hash_function must be callable")
        if self._hash is not None and self._hash is not hash_function:
            logger.debug("Replacing bound hash function on %r", self)
        self._hash = hash_function
        return self

    def add(self, item: Any) -> None:
        if self._hash is None:
            raise MissingHashFunction(
                "Sketch has no hash function bound; call bind_hash() before add()."
            )
        bucket = check_bucket(self._hash(item), self._bucket_count)
        self._counters[bucket] += 1

    def estimate_cardinality(self) -> int:
        return sum(self._counters)

    def copy(self) -> CounterSketch:
        return CounterSketch._from_counters(self._counters, self._hash)

    def union(self, other: CounterSketch) -> CounterSketch:
        from ..algebra import union

        if not isinstance(other, CounterSketch):
            raise TypeError("CounterSketch union requires another CounterSketch.")
        return union(self, other)

    def intersection(self, other: CounterSketch) -> CounterSketch:
        from ..algebra import intersection

        if not isinstance(other, CounterSketch):
            raise TypeError("CounterSketch intersection requires another CounterSketch.")
        return intersection(self, other)

    def a_not_b(self, other: CounterSketch) -> CounterSketch:
        from ..algebra import a_not_b

        if not isinstance(other, CounterSketch):
            raise TypeError("CounterSketch a_not_b requires another CounterSketch.")
        return a_not_b(self, other)

    def nonzero_buckets(self) -> int:
        """Testing/inspection helper counting occupied buckets."""
        return sum(1 for value in self._counters if value)

    def __len__(self) -> int:
        return self._bucket_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CounterSketch):
            return NotImplemented
        return self._counters == other._counters

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"CounterSketch(bucket_count={self._bucket_count}, "
            f"cardinality={self.estimate_cardinality()}, bound={self.has_hash})"
        )
