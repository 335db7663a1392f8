import io

import pytest

from lockparse.cargo import CargoParser, package_positions
from lockparse.types import Dependency, Library, Location, ParseError

LOCK = """[[package]]
name = "app"
version = "0.1.0"
dependencies = [
 "libc",
 "memchr 1.0.2",
 "url 1.7.2 (registry+https://github.com/rust-lang/crates.io-index)",
]

[[package]]
name = "libc"
version = "0.2.54"

[[package]]
name = "memchr"
version = "1.0.2"

[[package]]
name = "memchr"
version = "2.5.0"

[[package]]
name = "url"
version = "1.7.2"
dependencies = [
 "bogus a b c",
 "missing",
]
"""


def _lib(name, version, start, end):
    return Library(
        id=f"{name}@{version}",
        name=name,
        version=version,
        locations=[Location(start_line=start, end_line=end)],
    )


def test_parse_libraries():
    libs, _ = CargoParser().parse(io.StringIO(LOCK))
    assert libs == [
        _lib("app", "0.1.0", 1, 8),
        _lib("libc", "0.2.54", 10, 12),
        _lib("memchr", "1.0.2", 14, 16),
        _lib("memchr", "2.5.0", 18, 20),
        _lib("url", "1.7.2", 22, 28),
    ]


def test_parse_dependencies():
    _, deps = CargoParser().parse(io.BytesIO(LOCK.encode()))
    assert deps == [
        Dependency(
            id="app@0.1.0",
            depends_on=["libc@0.2.54", "memchr@1.0.2", "url@1.7.2"],
        )
    ]


def test_invalid_lock_raises():
    with pytest.raises(ParseError):
        CargoParser().parse(io.StringIO("[[package]\nname = "))


def test_package_positions():
    lines = ["[[package]]", 'name = "a"', 'version = "1"', "", "[[package]]", 'name = "b"', 'version = "2"']
    assert package_positions(lines) == {
        "a@1": Location(start_line=1, end_line=3),
        "b@2": Location(start_line=5, end_line=7),
    }


def test_package_positions_ignores_tables_without_name():
    assert package_positions(["[metadata]", 'x = "y"']) == {}