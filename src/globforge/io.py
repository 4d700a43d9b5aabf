"""Input/output helpers for the globforge CLI."""
import csv
import json
import os
import sys
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import TextIO

_CSV_COLUMNS = ("item", "path")


def _read_text_lines(handle: TextIO) -> list[str]:
    return [line.rstrip("\n\r") for line in handle if line.strip()]


def _read_jsonl(handle: TextIO) -> list[str]:
    data: list[str] = []
    for raw in handle:
        raw = raw.strip()
        if not raw:
            continue
        obj = json.loads(raw)
        if isinstance(obj, dict) and "item" in obj:
            value = obj["item"]
        else:
            value = obj
        data.append(str(value))
    return data


def _read_csv(handle: TextIO) -> list[str]:
    reader = csv.DictReader(handle)
    fieldnames = reader.fieldnames or []
    for column in _CSV_COLUMNS:
        if column in fieldnames:
            return [row[column] for row in reader if row.get(column)]
    raise ValueError("CSV missing required column 'item' or 'path'")


def _read_handle(handle: TextIO, ext: str) -> list[str]:
    if ext in {".json", ".jsonl"}:
        return _read_jsonl(handle)
    if ext == ".csv":
        return _read_csv(handle)
    return _read_text_lines(handle)


def _open_path(path: str) -> Iterable[str]:
    _, ext = os.path.splitext(path)
    ext = ext.lower()
    with open(path, encoding="utf-8", newline="" if ext == ".csv" else None) as handle:
        yield from _read_handle(handle, ext)


def read_items(path: str) -> list[str]:
    """Read match candidates from *path*; ``-`` reads plain lines from stdin."""
    if path == "-":
        return _read_text_lines(sys.stdin)
    return list(_open_path(path))


@contextmanager
def _output(path: str) -> Iterator[TextIO]:
    if path == "-":
        yield sys.stdout
        sys.stdout.flush()
        return
    with open(path, "w", encoding="utf-8") as handle:
        yield handle


def write_json(obj: object, path: str) -> None:
    with _output(path) as handle:
        json.dump(obj, handle, indent=2, sort_keys=True)
        handle.write("\n")


def write_text(text: str, path: str) -> None:
    """Write *text* verbatim to *path*, or to stdout when *path* is ``-``."""
    with _output(path) as handle:
        handle.write(text)
