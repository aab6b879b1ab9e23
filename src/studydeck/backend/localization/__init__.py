"""Shared translation helpers bridging the catalogue files and their consumers."""

from .registry import (
    ActiveCatalog,
    CatalogRegistry,
    LocalizationContext,
    UnknownLocaleError,
    normalise_locale,
)

__all__ = [
    "ActiveCatalog",
    "CatalogRegistry",
    "LocalizationContext",
    "UnknownLocaleError",
    "normalise_locale",
]
