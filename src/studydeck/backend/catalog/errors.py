"""Exceptions raised while loading or querying message catalogues."""

from __future__ import annotations

from pathlib import Path


class CatalogError(ValueError):
    """Base class for catalogue failures."""


class ParseError(CatalogError):
    """Raised when a catalogue line does not follow the ``key = value`` grammar."""

    def __init__(self, line: int, message: str, source: str | Path | None = None) -> None:
        self.line = line
        self.reason = message
        self.source = str(source) if source is not None else None
        location = f"{self.source}:{line}" if self.source else f"line {line}"
        super().__init__(f"{location}: {message}")


class DuplicateKeyError(CatalogError):
    """Raised when a key is defined more than once in a single catalogue."""

    def __init__(
        self,
        key: str,
        line: int | None = None,
        first_line: int | None = None,
        source: str | Path | None = None,
    ) -> None:
        self.key = key
        self.line = line
        self.first_line = first_line
        self.source = str(source) if source is not None else None

        message = f"duplicate key '{key}'"
        if line is not None and first_line is not None:
            message += f" on line {line} (first defined on line {first_line})"
        if self.source:
            message = f"{self.source}: {message}"
        super().__init__(message)


class CatalogMissingError(CatalogError):
    """Raised when the file backing a published locale cannot be found."""

    def __init__(self, locale: str, message: str) -> None:
        self.locale = locale
        super().__init__(message)


class MissingKeyError(CatalogError, KeyError):
    """Raised when a lookup misses and the caller asked for strict behaviour."""

    def __init__(self, key: str, locale: str | None = None) -> None:
        self.key = key
        self.locale = locale
        suffix = f" in locale '{locale}'" if locale else ""
        super().__init__(f"missing message key '{key}'{suffix}")

    def __str__(self) -> str:
        # KeyError would otherwise wrap the message in quotes.
        return str(self.args[0])


__all__ = [
    "CatalogError",
    "CatalogMissingError",
    "DuplicateKeyError",
    "MissingKeyError",
    "ParseError",
]
