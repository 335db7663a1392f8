import io

import pytest

from lockparse.cocoapods import CocoaPodsParser
from lockparse.types import Dependency, Library, ParseError

HAPPY = """PODS:
  - AppCenter (4.2.0):
    - AppCenter/Analytics (= 4.2.0)
    - AppCenter/Crashes (= 4.2.0)
  - AppCenter/Analytics (4.2.0):
    - AppCenter/Core
  - AppCenter/Core (4.2.0)
  - AppCenter/Crashes (4.2.0):
    - AppCenter/Core
  - KeychainAccess (4.2.1)

COCOAPODS: 1.10.1
"""


def _parse(text):
    libs, deps = CocoaPodsParser().parse(io.StringIO(text))
    libs.sort(key=lambda lib: (lib.name, lib.version))
    deps.sort(key=lambda dep: dep.id)
    return libs, deps


def _lib(name, version):
    return Library(id=f"{name}/{version}", name=name, version=version)


def test_happy_path():
    libs, deps = _parse(HAPPY)
    assert libs == [
        _lib("AppCenter", "4.2.0"),
        _lib("AppCenter/Analytics", "4.2.0"),
        _lib("AppCenter/Core", "4.2.0"),
        _lib("AppCenter/Crashes", "4.2.0"),
        _lib("KeychainAccess", "4.2.1"),
    ]
    assert deps == [
        Dependency(
            id="AppCenter/4.2.0",
            depends_on=["AppCenter/Analytics/4.2.0", "AppCenter/Crashes/4.2.0"],
        ),
        Dependency(id="AppCenter/Analytics/4.2.0", depends_on=["AppCenter/Core/4.2.0"]),
        Dependency(id="AppCenter/Crashes/4.2.0", depends_on=["AppCenter/Core/4.2.0"]),
    ]


def test_lock_without_dependencies():
    assert _parse("PODS: []\nCOCOAPODS: 1.10.1\n") == ([], [])


def test_wrong_dep_format_is_skipped():
    assert _parse("PODS:\n  - AppCenter\n  - Other:\n    - Child\n") == ([], [])


def test_non_list_children_raise():
    with pytest.raises(ParseError):
        CocoaPodsParser().parse(io.StringIO("PODS:\n  - A (1.0): foo\n"))


def test_non_string_child_raises():
    with pytest.raises(ParseError):
        CocoaPodsParser().parse(io.StringIO("PODS:\n  - A (1.0):\n    - {x: y}\n"))