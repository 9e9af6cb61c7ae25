from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias

Path: TypeAlias = str | Sequence[Any]


def split_path(path: Path) -> tuple[Any, ...]:
    """
    Dotted strings are split once; sequences are taken as-is so a segment
    may itself contain dots.
    """
    if isinstance(path, str):
        return tuple(path.split("."))
    return tuple(path)


def _index(segment: Any) -> int | None:
    if isinstance(segment, bool):
        return None
    if isinstance(segment, int):
        return segment
    if not isinstance(segment, str) or not (segment.isascii() and segment.isdecimal()):
        return None
    if segment != "0" and segment.startswith("0"):
        return None
    return int(segment)


def _lookup(current: Any, segment: Any) -> Any:
    if isinstance(current, Mapping):
        try:
            return current.get(segment)
        except TypeError:
            # unhashable segment
            return None
    index = _index(segment)
    if index is None or index < 0 or index >= len(current):
        return None
    return current[index]


def _indexable(value: Any) -> bool:
    if isinstance(value, Mapping):
        return True
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def get_path(value: Any, path: Path) -> Any:
    """
    Resolve ``path`` against nested mappings and sequences.

    Returns None as soon as a segment is missing or the current value can't
    be indexed. Never raises.
    """
    segments = split_path(path)
    current = value
    for segment in segments:
        if current is None or not _indexable(current):
            return None
        current = _lookup(current, segment)
    return current
