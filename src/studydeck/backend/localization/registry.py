"""Per-locale catalogue cache with hot reload and atomic locale switching."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from studydeck.backend.catalog import (
    Catalog,
    CatalogMissingError,
    Translator,
    load_catalog_file,
)
from studydeck.backend.config import (
    LocaleManifest,
    LocalizationSettings,
    catalog_path,
    load_manifest,
    load_settings,
)

logger = logging.getLogger(__name__)


class UnknownLocaleError(LookupError):
    """Raised when a locale is not published by the manifest."""

    def __init__(self, locale: str) -> None:
        self.locale = locale
        super().__init__(f"Locale '{locale}' is not available")


def normalise_locale(
    locale: str | None,
    available: Iterable[str],
    default: str | None,
) -> str | None:
    """Normalise requested locale to a supported catalogue key.

    Tries an exact match first (``pt_BR`` and ``pt-br`` are equivalent), then
    the bare language, then any regional variant of that language.
    """

    if not locale or not locale.strip():
        return default

    codes = tuple(available)
    requested = locale.strip().replace("_", "-").lower()
    if requested in codes:
        return requested

    language = requested.split("-")[0]
    if language in codes:
        return language
    for code in codes:
        if code.split("-")[0] == language:
            return code
    return default


@dataclass(frozen=True)
class LocalizationContext:
    """Everything a renderer needs to turn keys into text for one locale."""

    locale: str
    catalog: Catalog
    fallback: Catalog | None
    translate: Translator

    def __call__(self, key: str, /, **args: Any) -> str:
        return self.translate(key, **args)


class CatalogRegistry:
    """Lazily loads one catalogue per locale and swaps them on reload.

    Readers never take the lock: the published mapping is replaced by a new
    read-only mapping in a single assignment, so a reader sees either the old
    or the new set of catalogues.
    """

    def __init__(self, settings: LocalizationSettings | None = None) -> None:
        self._settings = settings or load_settings()
        self._catalogs: Mapping[str, Catalog] = MappingProxyType({})
        self._lock = threading.Lock()

    @property
    def settings(self) -> LocalizationSettings:
        return self._settings

    @property
    def manifest(self) -> LocaleManifest:
        return load_manifest(self._settings.translations_dir)

    @property
    def base_locale(self) -> str:
        return self.manifest.base_locale

    @property
    def default_locale(self) -> str:
        configured = normalise_locale(
            self._settings.default_locale, self.available_locales(), None
        )
        return configured or self.base_locale

    def available_locales(self) -> tuple[str, ...]:
        return self.manifest.codes

    def normalise(self, locale: str | None) -> str:
        """Resolve ``locale`` to a published code, falling back to the default."""

        default = self.default_locale
        return normalise_locale(locale, self.available_locales(), default) or default

    def require(self, locale: str) -> str:
        """Resolve ``locale`` without falling back; unknown locales raise."""

        code = normalise_locale(locale, self.available_locales(), None)
        if code is None:
            raise UnknownLocaleError(locale)
        return code

    def loaded_locales(self) -> tuple[str, ...]:
        return tuple(self._catalogs)

    def _load(self, code: str) -> Catalog:
        try:
            path = catalog_path(code, self._settings.translations_dir)
            return load_catalog_file(
                path, locale=code, duplicates=self._settings.duplicate_policy
            )
        except FileNotFoundError as error:
            raise CatalogMissingError(code, str(error)) from error

    def _publish(self, code: str, catalog: Catalog) -> None:
        updated = dict(self._catalogs)
        updated[code] = catalog
        self._catalogs = MappingProxyType(updated)

    def get(self, locale: str | None = None) -> Catalog:
        """Return the catalogue for ``locale``, loading it on first use."""

        code = self.normalise(locale)
        catalog = self._catalogs.get(code)
        if catalog is not None:
            return catalog

        with self._lock:
            catalog = self._catalogs.get(code)
            if catalog is None:
                catalog = self._load(code)
                self._publish(code, catalog)
        return catalog

    def reload(self, locale: str) -> Catalog:
        """Re-read ``locale`` from disk and replace the cached catalogue.

        The locale manifest is re-read first so locales added or renamed since
        start-up are picked up. A catalogue that fails to parse leaves the
        previous one in place.
        """

        load_manifest.cache_clear()
        code = self.require(locale)
        with self._lock:
            catalog = self._load(code)
            self._publish(code, catalog)
        logger.info("Reloaded catalogue for %s (%d messages)", code, len(catalog))
        return catalog

    def translator(self, locale: str | None = None) -> Translator:
        """Return a translator instance for the requested locale."""

        code = self.normalise(locale)
        catalog = self.get(code)
        fallback = self.get(self.base_locale) if code != self.base_locale else None
        return Translator(
            catalog=catalog,
            fallback=fallback,
            policy=self._settings.missing_key_policy,
        )

    def context(self, locale: str | None = None) -> LocalizationContext:
        translator = self.translator(locale)
        return LocalizationContext(
            locale=self.normalise(locale),
            catalog=translator.catalog,
            fallback=translator.fallback,
            translate=translator,
        )

    def payload(self, locale: str | None = None) -> dict[str, Any]:
        """Expose a catalogue and its fallback for API consumers."""

        code = self.normalise(locale)
        catalog = self.get(code)
        fallback = self.get(self.base_locale)
        return {
            "locale": code,
            "available_locales": list(self.available_locales()),
            "messages": catalog.as_dict(),
            "fallback": {
                "locale": self.base_locale,
                "messages": fallback.as_dict(),
            },
        }


class ActiveCatalog:
    """Holds the context renderers currently use and switches it atomically."""

    def __init__(self, registry: CatalogRegistry, locale: str | None = None) -> None:
        self._registry = registry
        self._lock = threading.Lock()
        self._context = registry.context(locale)

    @property
    def current(self) -> LocalizationContext:
        return self._context

    @property
    def locale(self) -> str:
        return self._context.locale

    def switch(self, locale: str | None) -> LocalizationContext:
        """Build the context for ``locale`` and then publish it."""

        with self._lock:
            context = self._registry.context(locale)
            self._context = context
        logger.info("Active locale switched to %s", context.locale)
        return context

    def refresh(self) -> LocalizationContext:
        """Reload the active locale from disk and publish the new context."""

        with self._lock:
            self._registry.reload(self._context.locale)
            context = self._registry.context(self._context.locale)
            self._context = context
        return context


__all__ = [
    "ActiveCatalog",
    "CatalogRegistry",
    "LocalizationContext",
    "UnknownLocaleError",
    "normalise_locale",
]
