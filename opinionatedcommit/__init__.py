"""Check commit messages against an opinionated style policy."""

__version__ = "1.0.0"
