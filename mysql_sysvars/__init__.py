"""Core package for the MySQL system variables page parser."""

__all__ = [
    "config",
    "models",
    "tokens",
    "history",
    "matchers",
    "parser",
    "table",
    "sql",
    "source",
    "runtime",
    "cli",
]
