"""mini-eslint: a small pluggable JavaScript/TypeScript linter."""

__version__ = "0.1.0"
