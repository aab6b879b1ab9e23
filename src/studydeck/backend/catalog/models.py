"""Immutable in-memory representation of a message catalogue."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .errors import CatalogError, DuplicateKeyError

KEY_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_-]*")


def is_valid_key(key: str) -> bool:
    """Return ``True`` when ``key`` is a usable message identifier."""

    return bool(KEY_PATTERN.fullmatch(key))


@dataclass(frozen=True)
class CatalogEntry:
    """A single ``key = value`` pair together with its source metadata."""

    key: str
    value: str
    section: str | None = None
    line: int | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not is_valid_key(self.key):
            raise CatalogError(f"Invalid message key: {self.key!r}")
        if not isinstance(self.value, str) or not self.value:
            raise CatalogError(f"Message '{self.key}' requires a non-empty string value")


class Catalog(Mapping[str, str]):
    """Read-only, insertion ordered mapping of message keys to display strings.

    Equality follows :class:`~collections.abc.Mapping`: two catalogues are
    equal when they map the same keys to the same values, regardless of
    locale, sections or source line numbers.
    """

    __slots__ = ("_locale", "_entries", "_index")

    def __init__(self, entries: Iterable[CatalogEntry] = (), *, locale: str | None = None) -> None:
        index: dict[str, CatalogEntry] = {}
        for entry in entries:
            previous = index.get(entry.key)
            if previous is not None:
                raise DuplicateKeyError(entry.key, entry.line, previous.line)
            index[entry.key] = entry

        object.__setattr__(self, "_locale", locale)
        object.__setattr__(self, "_entries", tuple(index.values()))
        object.__setattr__(self, "_index", MappingProxyType(index))

    @classmethod
    def from_mapping(cls, messages: Mapping[str, str], *, locale: str | None = None) -> Catalog:
        """Build a catalogue from a plain mapping, keeping its iteration order."""

        return cls(
            (CatalogEntry(key=key, value=value) for key, value in messages.items()),
            locale=locale,
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Catalog instances are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Catalog instances are immutable")

    def __getitem__(self, key: str) -> str:
        return self._index[key].value

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Catalog(locale={self._locale!r}, entries={len(self._entries)})"

    @property
    def locale(self) -> str | None:
        return self._locale

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    def entry(self, key: str) -> CatalogEntry:
        """Return the full entry for ``key`` (raises ``KeyError`` on a miss)."""

        return self._index[key]

    def sections(self) -> dict[str | None, tuple[str, ...]]:
        """Group keys by the section they were declared under."""

        grouped: dict[str | None, list[str]] = {}
        for entry in self._entries:
            grouped.setdefault(entry.section, []).append(entry.key)
        return {section: tuple(keys) for section, keys in grouped.items()}

    def as_dict(self) -> dict[str, str]:
        return {entry.key: entry.value for entry in self._entries}


__all__ = ["Catalog", "CatalogEntry", "KEY_PATTERN", "is_valid_key"]
