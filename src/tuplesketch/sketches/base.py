"""Factory utilities wiring settings to sketches and codecs."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import SketchSettings
from ..hashing import HashFunction, hash_from_settings
from ..serializer import SketchCodec, get_codec
from .counter_impl import CounterSketch


@dataclass(slots=True)
class SketchFactory:
    """Factory that produces sketches based on configuration."""

    settings: SketchSettings

    def hash_function(self) -> HashFunction:
        return hash_from_settings(self.settings)

    def codec(self, name: str | None = None) -> SketchCodec:
        return get_codec(name or self.settings.wire_format)

    def create(self, hash_function: HashFunction | None = None) -> CounterSketch:
        return CounterSketch(self.settings.bucket_count, hash_function or self.hash_function())

    def serialize(self, sketch: CounterSketch, fmt: str | None = None) -> bytes:
        return self.codec(fmt).encode(sketch)

    def deserialize(
        self,
        payload: bytes,
        fmt: str | None = None,
        *,
        bind: bool = False,
    ) -> CounterSketch:
        """Decode ``payload``; with ``bind`` the configured hash scheme is attached.

        The bound hash is sized to the decoded bucket count, which need not
        match the configured one.
        """
        sketch = self.codec(fmt).decode(payload)
        if bind:
            if sketch.bucket_count < 1:
                raise ValueError("Cannot bind a hash function to a sketch with no buckets.")
            sized = self.settings.model_copy(update={"bucket_count": sketch.bucket_count})
            sketch.bind_hash(hash_from_settings(sized))
        return sketch
