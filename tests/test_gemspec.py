import io

import pytest

from lockparse.gemspec import GemspecParser
from lockparse.types import Library, ParseError

NORMAL00 = """\
# -*- encoding: utf-8 -*-
# stub: rake 13.0.3 ruby lib

Gem::Specification.new do |s|
  s.name = "rake".freeze
  s.version = "13.0.3"

  s.required_rubygems_version = Gem::Requirement.new(">= 1.3.2".freeze) if s.respond_to? :required_rubygems_version=
  s.bindir = "exe".freeze
  s.licenses = ["MIT".freeze]
  s.summary = "Rake is a Make-like program implemented in Ruby".freeze
end
"""

NORMAL01 = """\
Gem::Specification.new do |spec|
  spec.name = "async"
  spec.version = "1.25.0"
  spec.summary = "A concurrency framework for Ruby."
  spec.files = Dir.glob("{lib}/**/*")
end
"""

LICENSE = """\
Gem::Specification.new do |spec|
  spec.name = "async"
  spec.version = "1.25.0"
  spec.license = "MIT".freeze
end
"""

MULTIPLE_LICENSES = """\
Gem::Specification.new do |s|
  s.name = "test-unit".freeze
  s.version = "3.3.7"
  s.licenses = ["Ruby".freeze, "BSDL".freeze, "PSFL".freeze]
end
"""

MALFORMED00 = """\
Gem::Specification.new do |s|
  spec.name = "async"
  spec.version = "1.25.0"
end
"""

MALFORMED01 = """\
Gem::Specification.new do |s|
  s.name = "async"
  s.license = "MIT"
end
"""


@pytest.mark.parametrize(
    ("content", "want"),
    [
        (NORMAL00, Library(name="rake", version="13.0.3", license="MIT")),
        (NORMAL01, Library(name="async", version="1.25.0")),
        (LICENSE, Library(name="async", version="1.25.0", license="MIT")),
        (
            MULTIPLE_LICENSES,
            Library(name="test-unit", version="3.3.7", license="Ruby, BSDL, PSFL"),
        ),
    ],
    ids=["happy", "another variable name", "license", "multiple licenses"],
)
def test_parse(content, want):
    libs, deps = GemspecParser().parse(io.StringIO(content))
    assert libs == [want]
    assert deps == []


@pytest.mark.parametrize(
    "content",
    [MALFORMED00, MALFORMED01],
    ids=["malformed variable name", "missing version"],
)
def test_parse_errors(content):
    with pytest.raises(ParseError, match="failed to parse gemspec"):
        GemspecParser().parse(io.StringIO(content))


def test_single_quotes_are_trimmed():
    content = "Gem::Specification.new do |s|\n  s.name = 'rake'\n  s.version = '13.0.3'\nend\n"
    libs, _ = GemspecParser().parse(io.StringIO(content))
    assert libs == [Library(name="rake", version="13.0.3")]


def test_binary_stream():
    libs, _ = GemspecParser().parse(io.BytesIO(NORMAL00.encode()))
    assert libs == [Library(name="rake", version="13.0.3", license="MIT")]


def test_empty_input_fails():
    with pytest.raises(ParseError):
        GemspecParser().parse(io.StringIO(""))