"""Parser for Bundler ``Gemfile.lock`` files."""

from __future__ import annotations

from collections.abc import Iterator
from typing import IO

from lockparse.types import Dependency, Library, Location, Parser
from lockparse.utils import _read_lines, package_id


def _leading_spaces(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _direct_dependencies(lines: Iterator[str]) -> list[str]:
    """Read the DEPENDENCIES section; the line ending it is consumed."""
    names: list[str] = []
    for line in lines:
        if _leading_spaces(line) != 2:
            break
        fields = line.split()
        if fields:
            names.append(fields[0])
    return names


class BundlerParser(Parser):
    """Reads gems and their dependency graph from a Gemfile.lock."""

    def parse(self, stream: IO) -> tuple[list[Library], list[Dependency]]:
        libs: dict[str, Library] = {}
        graph: list[tuple[str, list[str]]] = []
        depends_on: list[str] = []
        direct: list[str] = []
        pkg_id = ""
        line_num = 1

        lines = iter(_read_lines(stream))
        for line in lines:
            if _leading_spaces(line) == 4:
                if depends_on:
                    graph.append((pkg_id, depends_on))
                depends_on = []
                line = line.strip()
                fields = line.split()
                if len(fields) != 2:
                    continue
                name = fields[0]
                # drop parentheses and platform (1.13.6-x86_64-linux => 1.13.6)
                version = fields[1].strip("()").split("-", 1)[0]
                pkg_id = package_id(name, version)
                libs[name] = Library(
                    id=pkg_id,
                    name=name,
                    version=version,
                    indirect=True,
                    locations=[Location(start_line=line_num, end_line=line_num)],
                )
            if _leading_spaces(line) == 6:
                fields = line.split()
                if fields:
                    depends_on.append(fields[0])
            line_num += 1

            if line == "DEPENDENCIES":
                direct = _direct_dependencies(lines)

        if depends_on:
            graph.append((pkg_id, depends_on))

        for name in direct:
            if name in libs:
                libs[name].indirect = False

        deps = [
            Dependency(
                id=dep_id,
                depends_on=[
                    package_id(name, libs[name].version)
                    for name in names
                    if name in libs
                ],
            )
            for dep_id, names in graph
        ]
        return sorted(libs.values(), key=lambda lib: lib.name), deps