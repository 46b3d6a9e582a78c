"""Shared fixtures: spec files and template trees under tmp_path."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from openapi_render.engine import build_engine

PETSTORE: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {"title": "Pet Store", "version": "1.0.0"},
    "field": "widgets",
    "paths": {
        "/pets": {
            "get": {"operationId": "listPets", "summary": "List all pets"},
        },
    },
}


@pytest.fixture
def engine():
    return build_engine()


@pytest.fixture
def petstore() -> dict[str, Any]:
    return json.loads(json.dumps(PETSTORE))


@pytest.fixture
def spec_file(tmp_path: Path) -> Path:
    """PETSTORE written as JSON."""
    path = tmp_path / "openapi.json"
    path.write_text(json.dumps(PETSTORE))
    return path


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str | None]], Path]:
    """Build a template tree from {relative path: content}.

    A value of None creates a directory instead of a file.
    """
    def _make(entries: dict[str, str | None], name: str = "templates") -> Path:
        root = tmp_path / name
        root.mkdir()
        for rel, content in entries.items():
            path = root / rel
            if content is None:
                path.mkdir(parents=True, exist_ok=True)
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_bytes(content.encode("utf-8"))
        return root
    return _make


@pytest.fixture
def listing() -> Callable[[Path], dict[str, str | None]]:
    """Inverse of make_tree: every entry under a root with its content."""
    return _listing


def _listing(root: Path) -> dict[str, str | None]:
    listing: dict[str, str | None] = {}
    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root).as_posix()
        listing[rel] = None if path.is_dir() else path.read_bytes().decode("utf-8")
    return listing
