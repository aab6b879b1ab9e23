"""Pydantic models describing the locale manifest and runtime settings."""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from studydeck.backend.catalog import DuplicatePolicy, MissingKeyPolicy

_LOCALE_PATTERN = re.compile(r"[a-z]{2,3}(-[a-z0-9]{2,8})*")


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def _normalise_code(value: str) -> str:
    code = value.strip().replace("_", "-").lower()
    if not _LOCALE_PATTERN.fullmatch(code):
        raise ConfigurationError(f"Invalid locale code: {value!r}")
    return code


class LocaleManifestEntry(ImmutableModel):
    """A locale published by the manifest."""

    code: str
    name: str | None = None
    filename: str | None = Field(default=None, alias="file")

    @field_validator("code")
    @classmethod
    def _validate_code(cls, value: str) -> str:
        return _normalise_code(value)

    @field_validator("filename")
    @classmethod
    def _validate_filename(cls, value: str | None) -> str | None:
        if value is not None and (not value.strip() or Path(value).name != value):
            raise ConfigurationError("Catalogue filenames must be bare file names")
        return value

    @property
    def resolved_filename(self) -> str:
        return self.filename or f"{self.code}.ftl"


class LocaleManifest(ImmutableModel):
    """Collection of published locales and the base (fallback) locale."""

    base_locale: str
    locales: tuple[LocaleManifestEntry, ...]

    @field_validator("base_locale")
    @classmethod
    def _validate_base(cls, value: str) -> str:
        return _normalise_code(value)

    @model_validator(mode="after")
    def _validate_entries(self) -> LocaleManifest:
        if not self.locales:
            raise ConfigurationError("Locale manifest must declare at least one locale")
        codes = [entry.code for entry in self.locales]
        duplicates = sorted({code for code in codes if codes.count(code) > 1})
        if duplicates:
            raise ConfigurationError(f"Duplicate locale codes in manifest: {duplicates}")
        if self.base_locale not in codes:
            raise ConfigurationError(
                f"Base locale '{self.base_locale}' is not declared in the manifest"
            )
        return self

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(entry.code for entry in self.locales)

    def get_entry(self, code: str) -> LocaleManifestEntry:
        for entry in self.locales:
            if entry.code == code:
                return entry
        raise KeyError(code)


class LocalizationSettings(ImmutableModel):
    """Runtime options for loading and querying catalogues."""

    translations_dir: Path
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.REJECT
    missing_key_policy: MissingKeyPolicy = MissingKeyPolicy.RETURN_KEY
    default_locale: str | None = None

    @field_validator("default_locale")
    @classmethod
    def _validate_default(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return _normalise_code(value)


__all__ = [
    "ConfigurationError",
    "ImmutableModel",
    "LocaleManifest",
    "LocaleManifestEntry",
    "LocalizationSettings",
]
