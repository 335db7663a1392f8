# lockparse

`lockparse` reads dependency lock files, gem specifications and auditable
Rust executables, and reports the libraries they name and how those
libraries depend on one another.

| Parser                                   | Input                                                  |
|------------------------------------------|--------------------------------------------------------|
| `lockparse.bundler.BundlerParser`        | `Gemfile.lock`                                         |
| `lockparse.gemspec.GemspecParser`        | `*.gemspec`                                            |
| `lockparse.cargo.CargoParser`            | `Cargo.lock` (old format, v2 and v3 dependency forms)  |
| `lockparse.cocoapods.CocoaPodsParser`    | `Podfile.lock`                                         |
| `lockparse.rust_binary.RustBinaryParser` | ELF, PE or Mach-O executables with a `.dep-v0` section |

## Installation

```
pip install lockparse
```

The CocoaPods parser needs PyYAML, which is installed with the package.

## Usage

Every parser is a `lockparse.types.Parser` with a `parse(stream)` method. It
takes an open file and returns a pair: a list of `Library` records and a list
of `Dependency` records. The text parsers accept files opened in text or
binary mode; `RustBinaryParser` needs a binary-mode file.

```python
from lockparse.cargo import CargoParser

with open("Cargo.lock", "rb") as stream:
    libraries, dependencies = CargoParser().parse(stream)

for library in libraries:
    print(library.id, library.locations)

for dependency in dependencies:
    print(dependency.id, "->", ", ".join(dependency.depends_on))
```

### Records

`lockparse.types.Library` is a dataclass with `id`, `name`, `version`, `dev`,
`indirect`, `license`, `external_references` (a list of `ExternalRef`, each a
`RefType` and a `url`), `locations` (a list of `Location` with `start_line`
and `end_line`) and `file_path`. `Dependency` holds the `id` of a library and
the identifiers in `depends_on`.

What each parser fills in:

- **Bundler**: `id` as `name@version` (e.g. `pry@0.12.2`), the platform
  suffix dropped from versions, `indirect` false only for gems listed under
  `DEPENDENCIES`, and the line of each gem in `locations`. Libraries are
  sorted by name.
- **gemspec**: a single library with `name`, `version` and `license`
  (several licenses are joined with `", "`); no `id` and no dependencies.
  A file without a name or version raises `ParseError`.
- **Cargo**: `id` as `name@version`, the line range of each `[[package]]`
  table in `locations`, and sorted `depends_on` lists. Libraries are sorted
  with `library_sort_key`, dependencies with `dependency_sort_key`.
  Invalid TOML raises `ParseError`.
- **CocoaPods**: `id` as `name/version` (e.g. `AppCenter/Core/4.2.0`).
  Pods whose text cannot be read are skipped; a malformed document or a
  non-string child entry raises `ParseError`. Results are not sorted.
- **Rust binaries**: only runtime crates, in the order they are recorded;
  `indirect` is false for the root crate.

### Errors

Input that cannot be read raises `lockparse.types.ParseError`, a subclass of
`ValueError`. `RustBinaryParser` raises
`lockparse.rust_binary.UnrecognizedExecutableError` for data that is not an
ELF, PE or Mach-O executable and `NonRustBinaryError` for executables with
no embedded dependency data; both are `ParseError`s.
`lockparse.rust_binary.read_dependency_info(data)` returns the decoded
embedded JSON of an executable as a dictionary.

### Helpers

`lockparse.utils` offers `package_id(name, version)`, `unique_strings`,
`unique_libraries` (drops duplicate name and version pairs, merging their
locations) and `merge_maps`. `lockparse.cargo.package_positions(lines)` maps
each package of a Cargo.lock to its line range.

## What it does not do

`lockparse` is a library only: it has no command-line tool, does not find or
recognise lock files by itself, and does not resolve or fetch packages. You
choose the parser that fits the file.

## Running the tests

```
pip install -e ".[test]"
pytest
```