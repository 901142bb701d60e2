"""Byte codecs for counter sketches.

Two formats are provided:

``byte`` (default)
    ``[bucket_count & 0xFF] ++ [counter & 0xFF for each bucket]``. Both the
    length prefix and every counter are narrowed to a single byte, so bucket
    counts or counters above 255 wrap silently. Decoding derives the bucket
    count from the body length; the prefix byte is written but never trusted.

``wide``
    ``!4sBI`` header (magic ``TSKW``, version, bucket count) followed by one
    big-endian unsigned 64-bit integer per bucket. Lossless for counters up
    to ``2**64 - 1``.

Decoded sketches carry no hash function.
"""

from __future__ import annotations

import logging
import struct
import sys
from array import array
from collections.abc import Callable
from dataclasses import dataclass

from .errors import FormatError
from .sketches.counter_impl import CounterSketch

logger = logging.getLogger(__name__)

BYTE_MASK = 0xFF
WIDE_MAGIC = b"TSKW"
WIDE_VERSION = 1
WIDE_HEADER = struct.Struct("!4sBI")
MAX_WIDE_COUNTER = (1 << 64) - 1


def serialize(sketch: CounterSketch) -> bytes:
    buf = bytearray(1 + sketch.bucket_count)
    buf[0] = sketch.bucket_count & BYTE_MASK
    for i, value in enumerate(sketch.counters, start=1):
        buf[i] = value & BYTE_MASK
    return bytes(buf)


def deserialize(payload: bytes) -> CounterSketch:
    if len(payload) < 1:
        raise FormatError("Invalid sketch payload: missing length prefix.")
    body = payload[1:]
    if payload[0] != len(body) & BYTE_MASK:
        logger.debug(
            "Length byte %d disagrees with body of %d buckets; using body length.",
            payload[0],
            len(body),
        )
    return CounterSketch._from_counters(body)


def serialize_wide(sketch: CounterSketch) -> bytes:
    counters = sketch.counters
    if any(value > MAX_WIDE_COUNTER for value in counters):
        raise FormatError("Counter exceeds the 64-bit range of the wide format.")
    arr = array("Q", counters)
    if sys.byteorder == "little":
        arr.byteswap()
    header = WIDE_HEADER.pack(WIDE_MAGIC, WIDE_VERSION, sketch.bucket_count)
    return header + arr.tobytes()


def deserialize_wide(payload: bytes) -> CounterSketch:
    if len(payload) < WIDE_HEADER.size:
        raise FormatError("Invalid wide sketch payload: truncated header.")
    magic, version, bucket_count = WIDE_HEADER.unpack_from(payload)
    if magic != WIDE_MAGIC:
        raise FormatError(f"Invalid wide sketch payload: bad magic {magic!r}.")
    if version != WIDE_VERSION:
        raise FormatError(f"Unsupported wide sketch version {version}.")
    body = payload[WIDE_HEADER.size :]
    arr = array("Q")
    if len(body) != bucket_count * arr.itemsize:
        raise FormatError(
            f"Invalid wide sketch payload: expected {bucket_count} counters, "
            f"got {len(body)} body bytes."
        )
    arr.frombytes(body)
    if sys.byteorder == "little":
        arr.byteswap()
    return CounterSketch._from_counters(arr)


@dataclass(frozen=True, slots=True)
class SketchCodec:
    name: str
    encode: Callable[[CounterSketch], bytes]
    decode: Callable[[bytes], CounterSketch]


CODECS: dict[str, SketchCodec] = {
    "byte": SketchCodec(name="byte", encode=serialize, decode=deserialize),
    "wide": SketchCodec(name="wide", encode=serialize_wide, decode=deserialize_wide),
}


def get_codec(name: str) -> SketchCodec:
    if name not in CODECS:
        raise KeyError(f"Unknown sketch format: {name}")
    return CODECS[name]
