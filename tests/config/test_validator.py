from pathlib import Path

import pytest

from studydeck.backend.catalog import parse_catalog
from studydeck.backend.config import LocalizationSettings, load_settings
from studydeck.backend.localization.validator import (
    main,
    validate_catalogue,
    validate_locale_catalogues,
)


def test_packaged_catalogues_are_valid() -> None:
    results = validate_locale_catalogues(load_settings({}))
    assert results
    assert all(not issues for issues in results.values()), results


def test_fixture_catalogues_are_valid(settings: LocalizationSettings) -> None:
    results = validate_locale_catalogues(settings)
    assert results == {"en": [], "es": [], "pt-br": []}


def test_validator_flags_missing_and_extra_keys() -> None:
    base = parse_catalog("ok = Ok\ncancel = Cancel\n", locale="en")
    catalog = parse_catalog("ok = Vale\nstudy = Estudiar\n", locale="es")

    errors = validate_catalogue(catalog, base)

    assert any("missing 1 key(s) defined in en: cancel" in error for error in errors)
    assert any("absent from en: study" in error for error in errors)


def test_validator_flags_placeholder_drift() -> None:
    base = parse_catalog("greeting = Hello { $name }\n", locale="en")
    catalog = parse_catalog("greeting = Hola { $nombre }\n", locale="es")

    errors = validate_catalogue(catalog, base)

    assert errors == ["greeting: placeholders {nombre} differ from en {name}"]


def test_validator_reports_duplicates_and_parse_errors(
    settings: LocalizationSettings, translations_dir: Path
) -> None:
    translations_dir.joinpath("es.ftl").write_text(
        "rename-studyset = Renombrar\nrename-studyset = Renombrar\n", encoding="utf-8"
    )
    translations_dir.joinpath("pt_BR.ftl").write_text("broken line\n", encoding="utf-8")

    results = validate_locale_catalogues(settings)

    assert results["en"] == []
    assert any("duplicate key 'rename-studyset'" in issue for issue in results["es"])
    assert any("expected 'key = value'" in issue for issue in results["pt-br"])


def test_main_reports_status(
    translations_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["--translations-dir", str(translations_dir)]) == 0
    assert "[es] OK" in capsys.readouterr().out

    translations_dir.joinpath("es.ftl").write_text("view = Ver\n", encoding="utf-8")

    assert main(["--translations-dir", str(translations_dir), "es"]) == 1
    output = capsys.readouterr().out
    assert "[es]" in output and "issue(s) detected" in output


def test_broken_base_catalogue_fails_other_locales(
    settings: LocalizationSettings,
    translations_dir: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    translations_dir.joinpath("en.ftl").write_text("broken line\n", encoding="utf-8")

    results = validate_locale_catalogues(settings, ["es"])

    assert list(results) == ["es"]
    assert any("base catalogue en failed to load" in issue for issue in results["es"])
    assert main(["--translations-dir", str(translations_dir), "es"]) == 1
    assert "base catalogue en failed to load" in capsys.readouterr().out


def test_requested_locales_are_normalised(
    translations_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["EN", "pt_BR", "--translations-dir", str(translations_dir)]) == 0

    output = capsys.readouterr().out
    assert "[en] OK" in output
    assert "[pt-br] OK" in output


def test_undeclared_locale_is_reported(settings: LocalizationSettings) -> None:
    results = validate_locale_catalogues(settings, ["de"])

    assert any("not declared in manifest" in issue for issue in results["de"])
