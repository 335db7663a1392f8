"""Records shared by every lock-file parser."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass, field
from typing import IO


class RefType(enum.StrEnum):
    """Kind of an external reference attached to a library."""

    WEBSITE = "website"
    LICENSE = "license"
    VCS = "vcs"
    ISSUE_TRACKER = "issue-tracker"
    OTHER = "other"


@dataclass
class Location:
    """Line range of a package entry inside a lock file."""

    start_line: int = 0
    end_line: int = 0


@dataclass
class ExternalRef:
    """A link from a library to some outside resource."""

    type: RefType
    url: str


@dataclass
class Library:
    """A package found in a dependency file."""

    id: str = ""
    name: str = ""
    version: str = ""
    dev: bool = False
    indirect: bool = False
    license: str = ""
    external_references: list[ExternalRef] = field(default_factory=list)
    locations: list[Location] = field(default_factory=list)
    file_path: str = ""


@dataclass
class Dependency:
    """The packages that one package depends on, by package ID."""

    id: str
    depends_on: list[str] = field(default_factory=list)


class ParseError(ValueError):
    """Raised when a dependency file cannot be understood."""


class Parser(abc.ABC):
    """Reads a dependency file and reports its libraries and dependency graph."""

    @abc.abstractmethod
    def parse(self, stream: IO) -> tuple[list[Library], list[Dependency]]:
        """Parse the file-like ``stream`` into libraries and dependencies."""


def library_sort_key(library: Library) -> tuple[str, str, str]:
    """Order libraries by ID, then name, then version."""
    return (library.id, library.name, library.version)


def dependency_sort_key(dependency: Dependency) -> str:
    """Order dependencies by the ID of the depending package."""
    return dependency.id