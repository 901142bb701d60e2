"""Fixed-width counter sketches with elementwise set algebra."""

from .algebra import a_not_b, intersection, union
from .config import AppConfig, SketchSettings
from .errors import (
    DimensionMismatch,
    FormatError,
    HashContractViolation,
    MissingHashFunction,
    SketchError,
)
from .serializer import deserialize, serialize
from .sketches import CounterSketch, SketchFactory

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "CounterSketch",
    "DimensionMismatch",
    "FormatError",
    "HashContractViolation",
    "MissingHashFunction",
    "SketchError",
    "SketchFactory",
    "SketchSettings",
    "a_not_b",
    "deserialize",
    "intersection",
    "serialize",
    "union",
]
