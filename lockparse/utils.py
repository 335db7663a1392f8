"""Small helpers shared by the parsers."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from typing import IO

from lockparse.types import Library


def unique_strings(strings: Iterable[str]) -> list[str]:
    """Return the strings with duplicates removed, keeping first occurrences."""
    return list(dict.fromkeys(strings))


def unique_libraries(libraries: Iterable[Library]) -> list[Library]:
    """Drop duplicate name@version libraries, merging their locations."""
    unique: dict[str, Library] = {}
    for library in libraries:
        key = package_id(library.name, library.version)
        existing = unique.get(key)
        if existing is None:
            unique[key] = library
        elif library.locations:
            merged = sorted(
                [*existing.locations, *library.locations],
                key=lambda loc: loc.start_line,
            )
            unique[key] = dataclasses.replace(existing, locations=merged)
    return list(unique.values())


def merge_maps(parent: dict[str, str] | None, child: dict[str, str] | None):
    """Copy ``child`` into ``parent`` and return it; ``child`` if there is no parent."""
    if parent is None:
        return child
    if child:
        parent.update(child)
    return parent


def package_id(name: str, version: str) -> str:
    """Build the ``name@version`` identifier of a package."""
    return f"{name}@{version}"


def _read_lines(stream: IO) -> list[str]:
    """Read a text or binary stream and split it into lines without endings."""
    data = stream.read()
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8", errors="replace")
    lines = data.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]