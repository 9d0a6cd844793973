from __future__ import annotations

import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from blocksig.core.config import Settings
from blocksig.main import create_app


@pytest.fixture
def settings() -> Settings:
    # Small pool keeps tests fast while still running work items concurrently.
    return Settings(TARGET_WORKERS=4, LOG_LEVEL="DEBUG")


@pytest.fixture
def client(settings: Settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def write_blocks(tmp_path: Path):
    """Write the given chunks back to back into a temp file and return its path."""

    def _write(chunks: list[bytes], name: str = "input.bin") -> Path:
        path = tmp_path / name
        with path.open("wb") as f:
            for chunk in chunks:
                f.write(chunk)
        return path

    return _write


@pytest.fixture
def random_blocks():
    def _make(n: int, size: int) -> list[bytes]:
        return [os.urandom(size) for _ in range(n)]

    return _make
