# ruff: noqa: B008
"""Command-line helpers for building and combining serialized sketches."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

import typer

from tuplesketch import __version__
from tuplesketch import config as config_module
from tuplesketch.errors import DimensionMismatch, FormatError, HashContractViolation
from tuplesketch.sketches import CounterSketch, SketchFactory

OPERATIONS = ("union", "intersection", "a-not-b")


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tsketch version {__version__}")
        raise typer.Exit()


app = typer.Typer(help="Build, inspect and combine counter sketches.")


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Counter sketch CLI."""
    cfg = _config()
    logging.basicConfig(level=getattr(logging, cfg.logging.level))


def _config() -> config_module.AppConfig:
    return config_module.AppConfig.from_env()


def _factory(
    buckets: int | None = None,
    hash_scheme: str | None = None,
    fmt: str | None = None,
) -> SketchFactory:
    settings = _config().sketch
    overrides: dict[str, object] = {}
    if buckets is not None:
        overrides["bucket_count"] = buckets
    if hash_scheme is not None:
        overrides["hash_scheme"] = hash_scheme
    if fmt is not None:
        overrides["wire_format"] = fmt
    if overrides:
        try:
            settings = config_module.SketchSettings.model_validate(
                {**settings.model_dump(), **overrides}
            )
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
    return SketchFactory(settings=settings)


def _load_items(path: Path) -> Iterable[str]:
    with path.open("r", encoding="utf-8") as fp:
        for line in fp:
            item = line.strip()
            if item:
                yield item


def _read_sketch(factory: SketchFactory, path: Path) -> CounterSketch:
    if not path.exists():
        typer.echo(f"Sketch file not found: {path}", err=True)
        raise typer.Exit(code=1)
    try:
        return factory.deserialize(path.read_bytes())
    except FormatError as exc:
        typer.echo(f"Could not decode {path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def build(
    from_path: Path = typer.Option(..., "--from", "-f", help="Item file, one item per line"),
    out: Path = typer.Option(..., "--out", "-o", help="Destination sketch file"),
    buckets: int | None = typer.Option(
        None, "--buckets", "-b", min=1, help="Bucket count (default: {{BUCKET_COUNT}})"
    ),
    hash_scheme: str | None = typer.Option(
        None, "--hash", help="Hash scheme [modulo|keyed] (default: {{HASH_SCHEME}})"
    ),
    fmt: str | None = typer.Option(
        None, "--format", "-m", help="Wire format [byte|wide] (default: {{SKETCH_FORMAT}})"
    ),
) -> None:
    """Hash every item of a text file into a new sketch."""

    if not from_path.exists():
        typer.echo(f"Item file not found: {from_path}", err=True)
        raise typer.Exit(code=1)
    factory = _factory(buckets, hash_scheme, fmt)
    sketch = factory.create()
    try:
        for item in _load_items(from_path):
            sketch.add(item)
    except (HashContractViolation, ValueError) as exc:
        typer.echo(f"Could not hash items from {from_path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(factory.serialize(sketch))
    typer.echo(
        f"Built sketch with {sketch.estimate_cardinality()} items "
        f"across {sketch.bucket_count} buckets -> {out}"
    )


@app.command()
def inspect(
    path: Path = typer.Argument(..., help="Serialized sketch file"),
    fmt: str | None = typer.Option(
        None, "--format", "-m", help="Wire format [byte|wide] (default: {{SKETCH_FORMAT}})"
    ),
) -> None:
    """Print a JSON summary of a serialized sketch."""

    factory = _factory(fmt=fmt)
    sketch = _read_sketch(factory, path)
    payload: dict[str, object] = {
        "bucket_count": sketch.bucket_count,
        "cardinality": sketch.estimate_cardinality(),
        "nonzero_buckets": sketch.nonzero_buckets(),
    }
    if factory.settings.wire_format == "byte":
        payload["length_byte"] = path.read_bytes()[0]
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def combine(
    operation: str = typer.Argument(..., help="One of union|intersection|a-not-b"),
    left: Path = typer.Argument(..., help="Left operand sketch file"),
    right: Path = typer.Argument(..., help="Right operand sketch file"),
    out: Path = typer.Option(..., "--out", "-o", help="Destination sketch file"),
    fmt: str | None = typer.Option(
        None, "--format", "-m", help="Wire format [byte|wide] (default: {{SKETCH_FORMAT}})"
    ),
) -> None:
    """Combine two serialized sketches bucket by bucket."""

    if operation not in OPERATIONS:
        raise typer.BadParameter(f"Operation must be one of {', '.join(OPERATIONS)}.")
    factory = _factory(fmt=fmt)
    sketch_a = _read_sketch(factory, left)
    sketch_b = _read_sketch(factory, right)
    try:
        if operation == "union":
            result = sketch_a.union(sketch_b)
        elif operation == "intersection":
            result = sketch_a.intersection(sketch_b)
        else:
            result = sketch_a.a_not_b(sketch_b)
    except DimensionMismatch as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(factory.serialize(result))
    typer.echo(f"{operation}: cardinality={result.estimate_cardinality()} -> {out}")


if __name__ == "__main__":
    app()
