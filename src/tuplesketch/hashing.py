"""Hash-function capabilities mapping items to sketch buckets.

A sketch never hashes items itself; it is handed a ``HashFunction`` at
construction and trusts nothing about it except the call signature. Every
bucket the function returns is checked by :func:`check_bucket` before a
counter is touched.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from typing import Any

from .config import SketchSettings
from .errors import HashContractViolation

HashFunction = Callable[[Any], int]

DEFAULT_PERSON = b"tsketch"


def check_bucket(bucket: object, bucket_count: int) -> int:
    """Return ``bucket`` if it addresses a slot in ``[0, bucket_count)``."""

    # bool is an int subclass but never a meaningful bucket
    if isinstance(bucket, bool) or not isinstance(bucket, int):
        raise HashContractViolation(bucket, bucket_count)
    if not 0 <= bucket < bucket_count:
        raise HashContractViolation(bucket, bucket_count)
    return bucket


def modulo_hash(bucket_count: int) -> HashFunction:
    """Integer keys reduced modulo the bucket count."""

    if bucket_count <= 0:
        raise ValueError("bucket_count must be positive")

    def _hash(key: Any) -> int:
        return int(key) % bucket_count

    return _hash


def _key_bytes(key: Any) -> bytes:
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    return str(key).encode("utf-8")


def keyed_hash(bucket_count: int, person: bytes = DEFAULT_PERSON) -> HashFunction:
    """BLAKE2b 64-bit digest of the key, reduced modulo the bucket count.

    Strings are hashed as UTF-8; other non-bytes keys via ``str()``.
    """

    if bucket_count <= 0:
        raise ValueError("bucket_count must be positive")

    def _hash(key: Any) -> int:
        digest = hashlib.blake2b(_key_bytes(key), digest_size=8, person=person).digest()
        return int.from_bytes(digest, "big", signed=False) % bucket_count

    return _hash


def hash_from_settings(settings: SketchSettings) -> HashFunction:
    if settings.hash_scheme == "keyed":
        return keyed_hash(settings.bucket_count, settings.hash_person)
    return modulo_hash(settings.bucket_count)
