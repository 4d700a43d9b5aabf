"""Test configuration ensuring the local package is importable."""

from __future__ import annotations

import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

path_str = str(SRC)
if path_str not in sys.path:
    sys.path.insert(0, path_str)


@pytest.fixture
def write_items(tmp_path: pathlib.Path):
    """Write an item file under ``tmp_path`` and return its path as a string."""

    def _write(name: str, text: str) -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write
