"""Parsers for Gemfile.lock, gemspec, Cargo.lock and Podfile.lock files and auditable Rust binaries."""

__version__ = "0.1.0"
__all__ = ["types", "utils", "bundler", "gemspec", "cargo", "cocoapods", "rust_binary"]