"""Locale manifest and runtime settings."""

from .locale_config import (
    TRANSLATIONS_DIRECTORY,
    available_locales,
    catalog_path,
    load_manifest,
    load_settings,
    manifest_entries,
)
from .schema import (
    ConfigurationError,
    LocaleManifest,
    LocaleManifestEntry,
    LocalizationSettings,
)

__all__ = [
    "ConfigurationError",
    "LocaleManifest",
    "LocaleManifestEntry",
    "LocalizationSettings",
    "TRANSLATIONS_DIRECTORY",
    "available_locales",
    "catalog_path",
    "load_manifest",
    "load_settings",
    "manifest_entries",
]
