import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

SRC_ROOT = Path(__file__).resolve().parent.parent / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


@pytest.fixture(autouse=True)
def configure_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("BUCKET_COUNT", "10")
    monkeypatch.setenv("HASH_SCHEME", "modulo")
    monkeypatch.setenv("SKETCH_FORMAT", "byte")
    monkeypatch.setenv("HASH_PERSON", "tsketch-test")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    yield
