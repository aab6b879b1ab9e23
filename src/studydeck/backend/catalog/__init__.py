"""Message catalogue model, loader, serializer and lookups."""

from .errors import (
    CatalogError,
    CatalogMissingError,
    DuplicateKeyError,
    MissingKeyError,
    ParseError,
)
from .lookup import MissingKeyPolicy, Translator, format_message, lookup, placeholders
from .models import Catalog, CatalogEntry
from .parser import DuplicatePolicy, load_catalog_file, parse_catalog, serialize_catalog

__all__ = [
    "Catalog",
    "CatalogEntry",
    "CatalogError",
    "CatalogMissingError",
    "DuplicateKeyError",
    "DuplicatePolicy",
    "MissingKeyError",
    "MissingKeyPolicy",
    "ParseError",
    "Translator",
    "format_message",
    "load_catalog_file",
    "lookup",
    "parse_catalog",
    "placeholders",
    "serialize_catalog",
]
