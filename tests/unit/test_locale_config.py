"""Unit coverage for the locale manifest and settings loaders."""

from __future__ import annotations

from pathlib import Path

import pytest

from studydeck.backend.catalog import DuplicatePolicy, MissingKeyPolicy
from studydeck.backend.config import (
    TRANSLATIONS_DIRECTORY,
    ConfigurationError,
    available_locales,
    catalog_path,
    load_manifest,
    load_settings,
)


def test_packaged_manifest_lists_english_base() -> None:
    manifest = load_manifest()

    assert manifest.base_locale == "en"
    assert "en" in available_locales()
    assert catalog_path("en") == TRANSLATIONS_DIRECTORY / "en.ftl"


def test_manifest_entry_filename_override(translations_dir: Path) -> None:
    assert catalog_path("pt-br", translations_dir) == translations_dir / "pt_BR.ftl"


def test_unknown_locale_has_no_catalog_path(translations_dir: Path) -> None:
    with pytest.raises(FileNotFoundError):
        catalog_path("fr", translations_dir)


def test_missing_catalog_file_is_reported(translations_dir: Path) -> None:
    translations_dir.joinpath("es.ftl").unlink()

    with pytest.raises(FileNotFoundError, match="es"):
        catalog_path("es", translations_dir)


@pytest.mark.parametrize(
    "manifest",
    [
        "base_locale: fr\nlocales:\n  - code: en\n",
        "base_locale: en\nlocales: []\n",
        "base_locale: en\nlocales:\n  - code: en\n  - code: EN\n",
        "base_locale: en\nlocales:\n  - code: en\n    file: ../en.ftl\n",
        "- just\n- a list\n",
    ],
)
def test_invalid_manifests_raise_configuration_error(tmp_path: Path, manifest: str) -> None:
    tmp_path.joinpath("manifest.yaml").write_text(manifest, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_manifest(tmp_path)


def test_load_settings_defaults() -> None:
    settings = load_settings({})

    assert settings.translations_dir == TRANSLATIONS_DIRECTORY
    assert settings.duplicate_policy is DuplicatePolicy.REJECT
    assert settings.missing_key_policy is MissingKeyPolicy.RETURN_KEY
    assert settings.default_locale is None


def test_load_settings_reads_environment(tmp_path: Path) -> None:
    settings = load_settings(
        {
            "STUDYDECK_TRANSLATIONS_DIR": str(tmp_path),
            "STUDYDECK_DUPLICATE_POLICY": "Last-Wins",
            "STUDYDECK_MISSING_KEY_POLICY": "raise",
            "STUDYDECK_DEFAULT_LOCALE": "ES_es",
        }
    )

    assert settings.translations_dir == tmp_path
    assert settings.duplicate_policy is DuplicatePolicy.LAST_WINS
    assert settings.missing_key_policy is MissingKeyPolicy.RAISE
    assert settings.default_locale == "es-es"


def test_load_settings_uses_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STUDYDECK_MISSING_KEY_POLICY", "raise")

    assert load_settings().missing_key_policy is MissingKeyPolicy.RAISE


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("STUDYDECK_DUPLICATE_POLICY", "first-wins"),
        ("STUDYDECK_MISSING_KEY_POLICY", "ignore"),
        ("STUDYDECK_DEFAULT_LOCALE", "not a locale"),
    ],
)
def test_load_settings_rejects_invalid_values(name: str, value: str) -> None:
    with pytest.raises(ConfigurationError):
        load_settings({name: value})
