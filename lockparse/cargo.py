"""Parser for Cargo ``Cargo.lock`` files."""

from __future__ import annotations

import io
import logging
import tomllib
from collections.abc import Iterable
from dataclasses import dataclass
from typing import IO, Any

from lockparse.types import (
    Dependency,
    Library,
    Location,
    ParseError,
    Parser,
    dependency_sort_key,
    library_sort_key,
)
from lockparse.utils import _read_lines, package_id

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    name: str = ""
    version: str = ""
    start: int = 0
    end: int = 0

    def close(self, line_num: int) -> None:
        if self.end == 0:
            self.end = line_num


def _property_value(line: str) -> str:
    parts = line.split("=")
    if len(parts) == 2:
        return parts[1].strip(' "')
    return ""


def package_positions(lines: Iterable[str]) -> dict[str, Location]:
    """Map ``name@version`` of each table in a lock file to its line range."""
    positions: dict[str, Location] = {}
    current = _Entry()
    line_num = 1

    def store(entry: _Entry, last_line: int) -> None:
        if entry.name:
            entry.close(last_line)
            positions[package_id(entry.name, entry.version)] = Location(
                start_line=entry.start, end_line=entry.end
            )

    for line in lines:
        stripped = line.strip()
        if stripped.startswith("["):
            store(current, line_num - 1)
            current = _Entry(start=line_num)
        elif stripped.startswith("name ="):
            current.name = _property_value(line)
        elif stripped.startswith("version ="):
            current.version = _property_value(line)
        elif stripped == "":
            current.close(line_num - 1)
        line_num += 1

    store(current, line_num - 1)
    return positions


def _dependency(
    pkg_id: str, pkg: dict[str, Any], by_name: dict[str, dict[str, Any]]
) -> Dependency | None:
    depends_on: list[str] = []
    for entry in pkg.get("dependencies", []) or []:
        fields = str(entry).split()
        if len(fields) == 1:
            name = fields[0]
            target = by_name.get(name)
            if target is None:
                logger.debug("can't find version for %s", name)
                continue
            depends_on.append(package_id(name, str(target.get("version", ""))))
        elif len(fields) in (2, 3):
            depends_on.append(package_id(fields[0], fields[1]))
        else:
            logger.debug("wrong dependency format for %s", entry)
    if not depends_on:
        return None
    return Dependency(id=pkg_id, depends_on=sorted(depends_on))


class CargoParser(Parser):
    """Reads crates and their dependency graph from a Cargo.lock."""

    def parse(self, stream: IO) -> tuple[list[Library], list[Dependency]]:
        lines = _read_lines(stream)
        text = "\n".join(lines)
        try:
            lockfile = tomllib.load(io.BytesIO(text.encode("utf-8")))
        except tomllib.TOMLDecodeError as exc:
            raise ParseError(f"decode error: {exc}") from exc

        packages = lockfile.get("package", []) or []
        if not isinstance(packages, list):
            raise ParseError("decode error: 'package' must be an array of tables")

        positions = package_positions(lines)
        by_name = {str(pkg.get("name", "")): pkg for pkg in packages}

        libs: list[Library] = []
        deps: list[Dependency] = []
        for pkg in packages:
            name = str(pkg.get("name", ""))
            version = str(pkg.get("version", ""))
            pkg_id = package_id(name, version)
            lib = Library(id=pkg_id, name=name, version=version)
            if pkg_id in positions:
                lib.locations = [positions[pkg_id]]
            libs.append(lib)
            dep = _dependency(pkg_id, pkg, by_name)
            if dep is not None:
                deps.append(dep)

        libs.sort(key=library_sort_key)
        deps.sort(key=dependency_sort_key)
        return libs, deps