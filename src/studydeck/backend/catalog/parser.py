"""Parse and serialise the line-oriented ``key = value`` catalogue format.

The grammar is intentionally small::

    ### Resource comment (ignored)
    # Plain comment (ignored)

    ## Menu Bar
    view = View
    about = About

    [New StudySet Dialog]
    new-studyset-name-inputfield =
        Study set name

``## Title`` and ``[Title]`` both open a section. Sections only help humans
navigate the file; lookups never consult them. Indented lines directly below
an entry continue its value on a new line; their indentation relative to the
least indented continuation line is kept.
"""

from __future__ import annotations

import logging
import re
import textwrap
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .errors import CatalogError, DuplicateKeyError, ParseError
from .models import Catalog, CatalogEntry, is_valid_key

logger = logging.getLogger(__name__)

_SECTION_COMMENT = re.compile(r"##(?!#)\s*(.*)")
_INDENT = "    "


class DuplicatePolicy(str, Enum):
    """How the loader treats a key defined twice in one catalogue."""

    REJECT = "reject"
    LAST_WINS = "last-wins"


@dataclass
class _RawEntry:
    key: str
    line: int
    section: str | None
    first: str = ""
    continuation: list[str] = field(default_factory=list)

    @property
    def value(self) -> str:
        lines = [self.first] if self.first else []
        if self.continuation:
            lines.extend(textwrap.dedent("\n".join(self.continuation)).split("\n"))
        return "\n".join(lines)


def _section_title(line: str) -> str | None | bool:
    """Return the section opened by ``line``, or ``False`` if it opens none."""

    match = _SECTION_COMMENT.fullmatch(line)
    if match:
        return match.group(1).strip() or None
    if line.startswith("[") and line.endswith("]"):
        return line[1:-1].strip() or None
    return False


def _scan(text: str, source: str | Path | None) -> list[_RawEntry]:
    raw_entries: list[_RawEntry] = []
    current: _RawEntry | None = None
    section: str | None = None

    for number, raw_line in enumerate(text.replace("\r\n", "\n").split("\n"), start=1):
        line = raw_line.rstrip()
        if not line.strip():
            current = None
            continue

        if current is not None and line[0] in " \t":
            current.continuation.append(line)
            continue

        stripped = line.strip()
        title = _section_title(stripped)
        if title is not False:
            section = title
            current = None
            continue
        if stripped.startswith("#"):
            current = None
            continue

        key, separator, value = stripped.partition("=")
        if not separator:
            raise ParseError(number, "expected 'key = value'", source)
        key = key.strip()
        if not key:
            raise ParseError(number, "missing key before '='", source)
        if not is_valid_key(key):
            raise ParseError(number, f"invalid key {key!r}", source)

        current = _RawEntry(key=key, line=number, section=section, first=value.strip())
        raw_entries.append(current)

    return raw_entries


def parse_catalog(
    text: str,
    *,
    locale: str | None = None,
    duplicates: DuplicatePolicy | str = DuplicatePolicy.REJECT,
    source: str | Path | None = None,
) -> Catalog:
    """Parse catalogue ``text`` into an immutable :class:`Catalog`.

    Raises :class:`ParseError` for malformed lines and, under the default
    :attr:`DuplicatePolicy.REJECT`, :class:`DuplicateKeyError` for keys
    declared twice. With :attr:`DuplicatePolicy.LAST_WINS` the later value
    replaces the earlier one while the key keeps its first position.
    """

    policy = DuplicatePolicy(duplicates)
    if text.startswith("\ufeff"):
        text = text[1:]

    entries: dict[str, CatalogEntry] = {}
    for raw in _scan(text, source):
        value = raw.value
        if not value:
            raise ParseError(raw.line, f"message '{raw.key}' has no value", source)

        previous = entries.get(raw.key)
        if previous is not None:
            if policy is DuplicatePolicy.REJECT:
                raise DuplicateKeyError(raw.key, raw.line, previous.line, source)
            logger.warning(
                "Key '%s' on line %s overrides the definition on line %s%s",
                raw.key,
                raw.line,
                previous.line,
                f" in {source}" if source else "",
            )

        entries[raw.key] = CatalogEntry(
            key=raw.key, value=value, section=raw.section, line=raw.line
        )

    return Catalog(entries.values(), locale=locale)


def load_catalog_file(
    path: str | Path,
    *,
    locale: str | None = None,
    duplicates: DuplicatePolicy | str = DuplicatePolicy.REJECT,
) -> Catalog:
    """Read ``path`` as UTF-8 and parse it into a catalogue."""

    path = Path(path)
    text = path.read_text(encoding="utf-8")
    catalog = parse_catalog(text, locale=locale, duplicates=duplicates, source=path)
    logger.info("Loaded %d messages for locale %s from %s", len(catalog), locale, path.name)
    return catalog


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip())


def _render_entry(entry: CatalogEntry) -> list[str]:
    lines = entry.value.split("\n")
    if any(not line.strip() or line != line.rstrip() for line in lines):
        raise CatalogError(
            f"Message '{entry.key}' has trailing or blank-line whitespace "
            "that the catalogue format cannot represent"
        )

    # Continuation blocks are dedented on read, so one block line must sit at
    # column 0 for the indentation of the others to survive.
    first, *rest = lines
    if not _indent_width(first) and (not rest or min(map(_indent_width, rest)) == 0):
        return [f"{entry.key} = {first}", *(f"{_INDENT}{line}" for line in rest)]
    if min(map(_indent_width, lines)) == 0:
        return [f"{entry.key} =", *(f"{_INDENT}{line}" for line in lines)]
    raise CatalogError(
        f"Message '{entry.key}' is indented as a whole, which the catalogue "
        "format cannot represent"
    )


def serialize_catalog(catalog: Catalog) -> str:
    """Render ``catalog`` back into the ``key = value`` format."""

    output: list[str] = []
    section: str | None = None

    for entry in catalog.entries:
        if entry.section != section:
            if output:
                output.append("")
            output.append(f"## {entry.section}" if entry.section else "##")
            section = entry.section

        output.extend(_render_entry(entry))

    return "\n".join(output) + "\n" if output else ""


__all__ = ["DuplicatePolicy", "load_catalog_file", "parse_catalog", "serialize_catalog"]
