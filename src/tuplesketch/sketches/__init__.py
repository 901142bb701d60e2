"""Sketch selection helpers."""

from .base import SketchFactory
from .counter_impl import CounterSketch

__all__ = [
    "CounterSketch",
    "SketchFactory",
]
