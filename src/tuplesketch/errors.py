"""Exception hierarchy raised by sketch operations."""

from __future__ import annotations


class SketchError(Exception):
    """Base class for all tuplesketch failures."""


class FormatError(SketchError, ValueError):
    """Raised when a serialized sketch payload is empty or malformed."""


class DimensionMismatch(SketchError, ValueError):
    """Raised when set-algebra operands have differing bucket counts."""

    def __init__(self, left: int, right: int) -> None:
        super().__init__(f"Bucket count mismatch between sketches: {left} != {right}.")
        self.left = left
        self.right = right


class HashContractViolation(SketchError, IndexError):
    """Raised when a hash function returns a bucket outside ``[0, bucket_count)``."""

    def __init__(self, bucket: object, bucket_count: int) -> None:
        super().__init__(
            f"Hash function returned {bucket!r}; expected an integer in [0, {bucket_count})."
        )
        self.bucket = bucket
        self.bucket_count = bucket_count


class MissingHashFunction(SketchError, RuntimeError):
    """Raised when ``add`` is called on a sketch with no bound hash function."""
