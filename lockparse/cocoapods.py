"""Parser for CocoaPods ``Podfile.lock`` files."""

from __future__ import annotations

import logging
from typing import IO

import yaml

from lockparse.types import Dependency, Library, ParseError, Parser
from lockparse.utils import unique_libraries

logger = logging.getLogger(__name__)


def _pod_id(name: str, version: str) -> str:
    return f"{name}/{version}"


def _parse_pod(text: str) -> Library:
    """Parse ``'AppCenter (4.2.0)'`` into a library."""
    parts = text.split(" (")
    if len(parts) != 2:
        raise ParseError(f"Unable to determine cocoapods dependency: {text!r}")
    name = parts[0]
    version = parts[1].strip().strip("()")
    return Library(id=_pod_id(name, version), name=name, version=version)


class CocoaPodsParser(Parser):
    """Reads pods and their dependency graph from a Podfile.lock."""

    def parse(self, stream: IO) -> tuple[list[Library], list[Dependency]]:
        try:
            document = yaml.safe_load(stream)
        except yaml.YAMLError as exc:
            raise ParseError(f"failed to decode cocoapods lock file: {exc}") from exc
        if document is None:
            raise ParseError("failed to decode cocoapods lock file: empty document")
        if not isinstance(document, dict):
            raise ParseError("failed to decode cocoapods lock file: not a mapping")

        pods = document.get("PODS") or []
        if not isinstance(pods, list):
            raise ParseError("failed to decode cocoapods lock file: PODS must be a list")

        parsed: dict[str, Library] = {}
        children: dict[str, list[str]] = {}
        for pod in pods:
            if isinstance(pod, str):
                try:
                    lib = _parse_pod(pod)
                except ParseError as exc:
                    logger.debug("%s", exc)
                    continue
                parsed[lib.name] = lib
            elif isinstance(pod, dict):
                for key, child_deps in pod.items():
                    try:
                        lib = _parse_pod(str(key))
                    except ParseError as exc:
                        logger.debug("%s", exc)
                        continue
                    parsed[lib.name] = lib
                    if not isinstance(child_deps, list):
                        raise ParseError(
                            f"invalid value of cocoapods direct dependency: {child_deps!r}"
                        )
                    for child in child_deps:
                        if not isinstance(child, str):
                            raise ParseError(f"must be string: {child!r}")
                        children.setdefault(lib.name, []).append(child.split()[0])

        def lookup(name: str) -> Library:
            return parsed.get(name, Library())

        deps = [
            Dependency(
                id=lookup(name).id,
                depends_on=[_pod_id(child, lookup(child).version) for child in names],
            )
            for name, names in children.items()
        ]
        return unique_libraries(parsed.values()), deps