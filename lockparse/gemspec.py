"""Parser for RubyGems ``.gemspec`` files."""

from __future__ import annotations

import re
from typing import IO

from lockparse.types import Dependency, Library, ParseError, Parser
from lockparse.utils import _read_lines

_SPEC_NEW = "Gem::Specification.new"

# e.g. "Gem::Specification.new do |s|" => s
_NEW_VAR = re.compile(r"\|(?P<var>.*)\|")
_NAME = re.compile(r"\.name\s*=\s*(?P<name>\S+)")
_VERSION = re.compile(r"\.version\s*=\s*(?P<version>\S+)")
_LICENSE = re.compile(r"\.license\s*=\s*(?P<license>\S+)")
_LICENSES = re.compile(r"\.licenses\s*=\s*\[(?P<licenses>.+)\]")


def _find(pattern: re.Pattern[str], line: str, group: str) -> str:
    match = pattern.search(line)
    return match.group(group) if match else ""


def _trim(value: str) -> str:
    """Strip quotes and a trailing ``.freeze``: ``"async".freeze`` => ``async``."""
    return value.strip().removesuffix(".freeze").strip("'\"")


def _parse_licenses(value: str) -> str:
    return ", ".join(_trim(part) for part in value.split(","))


class GemspecParser(Parser):
    """Reads the name, version and license of a gem from its gemspec."""

    def parse(self, stream: IO) -> tuple[list[Library], list[Dependency]]:
        new_var = name = version = license_ = ""

        for raw in _read_lines(stream):
            line = raw.strip()
            if _SPEC_NEW in line:
                new_var = _find(_NEW_VAR, line, "var")
            if not new_var:
                continue

            if line.startswith(f"{new_var}.name"):
                name = _trim(_find(_NAME, line, "name"))
            elif line.startswith(f"{new_var}.version"):
                version = _trim(_find(_VERSION, line, "version"))
            elif line.startswith(f"{new_var}.licenses"):
                license_ = _parse_licenses(_find(_LICENSES, line, "licenses"))
            elif line.startswith(f"{new_var}.license"):
                license_ = _trim(_find(_LICENSE, line, "license"))

            if name and version and license_:
                break

        if not name or not version:
            raise ParseError("failed to parse gemspec")

        return [Library(name=name, version=version, license=license_)], []