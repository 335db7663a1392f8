[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lockparse"
version = "0.1.0"
description = "Parsers for Gemfile.lock, gemspec, Cargo.lock and Podfile.lock files and auditable Rust binaries"
requires-python = ">=3.11"
keywords = ["lockfile", "dependencies", "bundler", "gemspec", "cargo", "cocoapods", "sbom"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["lockparse"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
