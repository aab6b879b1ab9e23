"""Validate published catalogues and report issues helpful to translators."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from studydeck.backend.catalog import (
    Catalog,
    CatalogError,
    DuplicatePolicy,
    load_catalog_file,
    placeholders,
)
from studydeck.backend.config import (
    ConfigurationError,
    LocalizationSettings,
    catalog_path,
    load_manifest,
    load_settings,
)

from .registry import normalise_locale


def _format_keys(keys: set[str]) -> str:
    return ", ".join(sorted(keys))


def _load(code: str, directory: Path) -> tuple[Catalog | None, list[str]]:
    # Duplicates are always reported here, whatever the runtime policy is.
    try:
        path = catalog_path(code, directory)
        catalog = load_catalog_file(path, locale=code, duplicates=DuplicatePolicy.REJECT)
    except FileNotFoundError as error:
        return None, [f"failed to load catalogue: {error}"]
    except CatalogError as error:
        return None, [str(error)]
    return catalog, []


def validate_catalogue(catalog: Catalog, base: Catalog) -> list[str]:
    """Compare ``catalog`` against the ``base`` catalogue."""

    errors: list[str] = []
    base_locale = base.locale or "base"

    missing = set(base) - set(catalog)
    if missing:
        errors.append(
            f"missing {len(missing)} key(s) defined in {base_locale}: {_format_keys(missing)}"
        )

    extra = set(catalog) - set(base)
    if extra:
        errors.append(f"{len(extra)} key(s) absent from {base_locale}: {_format_keys(extra)}")

    for key in catalog:
        if key not in base:
            continue
        expected = placeholders(base[key])
        found = placeholders(catalog[key])
        if expected != found:
            errors.append(
                f"{key}: placeholders {{{_format_keys(found)}}} differ from "
                f"{base_locale} {{{_format_keys(expected)}}}"
            )

    return errors


def validate_locale_catalogues(
    settings: LocalizationSettings | None = None,
    locales: Sequence[str] | None = None,
) -> dict[str, list[str]]:
    """Validate catalogues and return issues keyed by locale."""

    settings = settings or load_settings()
    directory = settings.translations_dir
    manifest = load_manifest(directory)
    if locales:
        # Unknown codes are kept as given so they are reported, not dropped.
        targets = [normalise_locale(code, manifest.codes, None) or code for code in locales]
    else:
        targets = list(manifest.codes)

    base_catalog, base_issues = _load(manifest.base_locale, directory)
    results: dict[str, list[str]] = {}

    for code in targets:
        if code == manifest.base_locale:
            results[code] = list(base_issues)
            continue

        catalog, issues = _load(code, directory)
        if base_catalog is None:
            reason = "; ".join(base_issues)
            issues.append(f"base catalogue {manifest.base_locale} failed to load: {reason}")
        elif catalog is not None:
            issues.extend(validate_catalogue(catalog, base_catalog))
        results[code] = issues

    return results


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate published message catalogues against the base locale."
    )
    parser.add_argument(
        "locales",
        nargs="*",
        help="Specific locales to validate (defaults to every locale in the manifest)",
    )
    parser.add_argument(
        "--translations-dir",
        type=Path,
        default=None,
        help="Directory holding manifest.yaml and the catalogue files",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
        if args.translations_dir is not None:
            settings = settings.model_copy(update={"translations_dir": args.translations_dir})
        results = validate_locale_catalogues(settings, args.locales or None)
    except (ConfigurationError, FileNotFoundError) as error:
        print(f"failed to load locale manifest: {error}")
        return 1

    exit_code = 0
    for locale, issues in results.items():
        if issues:
            exit_code = 1
            print(f"[{locale}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{locale}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
