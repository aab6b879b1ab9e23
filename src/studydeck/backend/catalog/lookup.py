"""Key lookups and message formatting on top of loaded catalogues."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from .errors import MissingKeyError
from .models import Catalog

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\s*\$([A-Za-z][A-Za-z0-9_-]*)\s*\}")


class MissingKeyPolicy(str, Enum):
    """What a :class:`Translator` does when no catalogue defines a key."""

    RETURN_KEY = "return-key"
    RAISE = "raise"


def lookup(catalog: Catalog, key: str) -> str:
    """Return the value stored for ``key`` exactly as written."""

    try:
        return catalog[key]
    except KeyError:
        raise MissingKeyError(key, catalog.locale) from None


def placeholders(value: str) -> set[str]:
    """Return the placeholder names referenced by ``value``."""

    return set(PLACEHOLDER_PATTERN.findall(value))


def format_message(value: str, args: Mapping[str, Any]) -> str:
    """Substitute ``{ $name }`` placeholders, leaving unknown ones untouched."""

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in args:
            return str(args[name])
        logger.warning("No argument supplied for placeholder '%s'", name)
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, value)


@dataclass(frozen=True)
class Translator:
    """Callable helper for retrieving localized strings."""

    catalog: Catalog
    fallback: Catalog | None = None
    policy: MissingKeyPolicy = MissingKeyPolicy.RETURN_KEY

    @property
    def locale(self) -> str | None:
        return self.catalog.locale

    def resolve(self, key: str) -> str | None:
        value = self.catalog.get(key)
        if value is None and self.fallback is not None:
            value = self.fallback.get(key)
            if value is not None:
                logger.debug(
                    "Key '%s' missing for %s; using %s", key, self.locale, self.fallback.locale
                )
        return value

    def __call__(self, key: str, /, **args: Any) -> str:
        value = self.resolve(key)
        if value is None:
            if self.policy is MissingKeyPolicy.RAISE:
                raise MissingKeyError(key, self.locale)
            logger.warning("Missing message key '%s' for locale %s", key, self.locale)
            return key
        return format_message(value, args) if args else value


__all__ = [
    "MissingKeyPolicy",
    "PLACEHOLDER_PATTERN",
    "Translator",
    "format_message",
    "lookup",
    "placeholders",
]
