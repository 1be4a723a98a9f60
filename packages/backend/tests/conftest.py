from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from waifurary.core.config import AppPaths
from waifurary.main import create_app


@pytest.fixture
def paths(tmp_path: Path) -> AppPaths:
    return AppPaths.from_root(tmp_path / "waifurary")


@pytest.fixture
def client(paths: AppPaths) -> TestClient:
    return TestClient(create_app(paths))


def write_sidecar(metadata_root: Path, folder: str, image: str, content) -> Path:
    """Write a sidecar; ``content`` is dumped as JSON unless it is already a str."""
    path = metadata_root / folder / f"{image}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    text = content if isinstance(content, str) else json.dumps(content)
    path.write_text(text, encoding="utf-8")
    return path


def record(source: str = "", author: str = "", tags: list[str] | None = None) -> dict:
    return {"source": source, "author": author, "tags": tags or []}


def make_undecodable_dir(parent: Path, raw_name: bytes = b"bad\xff") -> bytes:
    """Create ``parent/<raw_name>`` with a name that is not valid UTF-8."""
    if os.name != "posix" or sys.platform == "darwin":
        pytest.skip("filesystem requires decodable names")
    path = os.path.join(os.fsencode(parent), raw_name)
    try:
        os.makedirs(path)
    except OSError:
        pytest.skip("filesystem rejects undecodable names")
    return path
