"""Configuration loader for the locale manifest and environment settings."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml
from pydantic import ValidationError

from .schema import (
    ConfigurationError,
    LocaleManifest,
    LocaleManifestEntry,
    LocalizationSettings,
)

TRANSLATIONS_DIRECTORY = Path(__file__).resolve().parents[2] / "translations"
MANIFEST_FILENAME = "manifest.yaml"

ENV_TRANSLATIONS_DIR = "STUDYDECK_TRANSLATIONS_DIR"
ENV_DUPLICATE_POLICY = "STUDYDECK_DUPLICATE_POLICY"
ENV_MISSING_KEY_POLICY = "STUDYDECK_MISSING_KEY_POLICY"
ENV_DEFAULT_LOCALE = "STUDYDECK_DEFAULT_LOCALE"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


@lru_cache(maxsize=8)
def load_manifest(directory: Path = TRANSLATIONS_DIRECTORY) -> LocaleManifest:
    """Load and cache the locale manifest stored in ``directory``."""

    manifest_file = Path(directory) / MANIFEST_FILENAME
    if not manifest_file.exists():
        raise FileNotFoundError(f"Locale manifest not found: {manifest_file}")

    raw_manifest = _load_yaml(manifest_file)

    try:
        return LocaleManifest.model_validate(raw_manifest)
    except ValidationError as error:
        raise ConfigurationError(f"Manifest validation failed: {error}") from error


def manifest_entries(directory: Path = TRANSLATIONS_DIRECTORY) -> Sequence[LocaleManifestEntry]:
    """Expose the configured manifest entries."""

    return load_manifest(directory).locales


def available_locales(directory: Path = TRANSLATIONS_DIRECTORY) -> Sequence[str]:
    """Return the locale codes declared in the manifest."""

    return load_manifest(directory).codes


def catalog_path(code: str, directory: Path = TRANSLATIONS_DIRECTORY) -> Path:
    """Return the catalogue file backing ``code``."""

    try:
        entry = load_manifest(directory).get_entry(code)
    except KeyError as exc:
        raise FileNotFoundError(f"Locale '{code}' not declared in manifest") from exc

    path = Path(directory) / entry.resolved_filename
    if not path.exists():
        raise FileNotFoundError(f"Catalogue file for locale '{code}' missing: {path.name}")
    return path


def load_settings(environ: Mapping[str, str] | None = None) -> LocalizationSettings:
    """Build :class:`LocalizationSettings` from ``STUDYDECK_*`` variables."""

    env = os.environ if environ is None else environ

    raw: dict[str, Any] = {
        "translations_dir": Path(
            env.get(ENV_TRANSLATIONS_DIR) or TRANSLATIONS_DIRECTORY
        ).expanduser(),
    }
    if env.get(ENV_DUPLICATE_POLICY):
        raw["duplicate_policy"] = env[ENV_DUPLICATE_POLICY].strip().lower()
    if env.get(ENV_MISSING_KEY_POLICY):
        raw["missing_key_policy"] = env[ENV_MISSING_KEY_POLICY].strip().lower()
    if env.get(ENV_DEFAULT_LOCALE):
        raw["default_locale"] = env[ENV_DEFAULT_LOCALE]

    try:
        return LocalizationSettings.model_validate(raw)
    except ValidationError as error:
        raise ConfigurationError(f"Invalid localisation settings: {error}") from error


__all__ = [
    "ENV_DEFAULT_LOCALE",
    "ENV_DUPLICATE_POLICY",
    "ENV_MISSING_KEY_POLICY",
    "ENV_TRANSLATIONS_DIR",
    "MANIFEST_FILENAME",
    "TRANSLATIONS_DIRECTORY",
    "available_locales",
    "catalog_path",
    "load_manifest",
    "load_settings",
    "manifest_entries",
]
