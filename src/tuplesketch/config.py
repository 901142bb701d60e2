"""Centralised configuration models leveraging Pydantic."""

from __future__ import annotations

import os
import re

from pydantic import BaseModel, Field, field_validator

PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Z0-9_]+)\}\}")

DEFAULT_BUCKET_COUNT = 1 << 16
HASH_SCHEMES = frozenset({"modulo", "keyed"})
WIRE_FORMATS = frozenset({"byte", "wide"})
LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def _is_placeholder(value: object) -> bool:
    return isinstance(value, str) and PLACEHOLDER_PATTERN.fullmatch(value.strip()) is not None


def _resolve_int(value: object, placeholder: str, default: int) -> int:
    if value is None or _is_placeholder(value):
        return default
    if isinstance(value, bool):
        raise TypeError(f"{placeholder} must resolve to an integer value")
    if isinstance(value, (int, str)):
        return int(value)
    raise TypeError(f"{placeholder} must resolve to an integer value")


def _resolve_choice(
    value: object,
    placeholder: str,
    default: str,
    choices: frozenset[str],
    *,
    upper: bool = False,
) -> str:
    if value is None or _is_placeholder(value):
        return default
    text = str(value).strip()
    text = text.upper() if upper else text.lower()
    if text not in choices:
        options = ", ".join(f"'{choice}'" for choice in sorted(choices))
        raise ValueError(f"{placeholder} must be one of {options}")
    return text


def _resolve_bytes(value: object, placeholder: str, default: bytes) -> bytes:
    if value is None or _is_placeholder(value):
        return default
    if isinstance(value, bytes):
        data = value
    elif isinstance(value, str):
        data = value.encode("utf-8")
    else:
        raise TypeError(f"{placeholder} must resolve to a string")
    # blake2b personalisation is capped at 16 bytes
    if len(data) > 16:
        raise ValueError(f"{placeholder} must be at most 16 bytes")
    return data


class SketchSettings(BaseModel):
    bucket_count: int = Field(default=DEFAULT_BUCKET_COUNT)
    hash_scheme: str = Field(default="modulo")
    wire_format: str = Field(default="byte")
    hash_person: bytes = Field(default=b"tsketch")

    @field_validator("bucket_count", mode="before")
    def _v_bucket_count(cls, v: object) -> int:
        value = _resolve_int(v, "{{BUCKET_COUNT}}", DEFAULT_BUCKET_COUNT)
        if value <= 0:
            raise ValueError("{{BUCKET_COUNT}} must be a positive integer")
        return value

    @field_validator("hash_scheme", mode="before")
    def _v_hash_scheme(cls, v: object) -> str:
        return _resolve_choice(v, "{{HASH_SCHEME}}", "modulo", HASH_SCHEMES)

    @field_validator("wire_format", mode="before")
    def _v_wire_format(cls, v: object) -> str:
        return _resolve_choice(v, "{{SKETCH_FORMAT}}", "byte", WIRE_FORMATS)

    @field_validator("hash_person", mode="before")
    def _v_hash_person(cls, v: object) -> bytes:
        return _resolve_bytes(v, "{{HASH_PERSON}}", b"tsketch")


class LoggingSettings(BaseModel):
    level: str = Field(default="WARNING")

    @field_validator("level", mode="before")
    def _v_level(cls, v: object) -> str:
        return _resolve_choice(v, "{{LOG_LEVEL}}", "WARNING", LOG_LEVELS, upper=True)


class AppConfig(BaseModel):
    sketch: SketchSettings = Field(default_factory=SketchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_env(cls) -> AppConfig:
        env = os.environ
        sketch_kwargs = {
            "bucket_count": env.get("BUCKET_COUNT"),
            "hash_scheme": env.get("HASH_SCHEME"),
            "wire_format": env.get("SKETCH_FORMAT"),
            "hash_person": env.get("HASH_PERSON"),
        }
        logging_kwargs = {
            "level": env.get("LOG_LEVEL"),
        }
        payload: dict[str, object] = {}
        if any(value is not None for value in sketch_kwargs.values()):
            payload["sketch"] = {k: v for k, v in sketch_kwargs.items() if v is not None}
        if any(value is not None for value in logging_kwargs.values()):
            payload["logging"] = {k: v for k, v in logging_kwargs.items() if v is not None}
        return cls(**payload)
