"""Expose translation catalogues to front-end consumers."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from studydeck.backend.app.http import current_registry
from studydeck.backend.catalog import MissingKeyError

blueprint = Blueprint("translations", __name__, url_prefix="/api/v1/translations")

_TRUTHY = {"1", "true", "yes", "on"}


@blueprint.get("/")
def get_default_translations():
    """Return translations for the requested or default locale."""

    locale_hint = request.args.get("locale")
    payload = current_registry().payload(locale_hint)
    return jsonify(payload), 200


@blueprint.get("/<locale>")
def get_locale_translations(locale: str):
    """Return translations for a specific locale slug."""

    payload = current_registry().payload(locale)
    return jsonify(payload), 200


@blueprint.get("/<locale>/messages/<key>")
def get_message(locale: str, key: str):
    """Resolve a single key; remaining query parameters fill placeholders."""

    translator = current_registry().translator(locale)
    strict = (request.args.get("strict") or "").strip().lower() in _TRUTHY
    args = {name: value for name, value in request.args.items() if name != "strict"}

    missing = translator.resolve(key) is None
    if missing and strict:
        raise MissingKeyError(key, translator.locale)

    return (
        jsonify(
            {
                "locale": translator.locale,
                "key": key,
                "value": translator(key, **args),
                "missing": missing,
            }
        ),
        200,
    )


@blueprint.post("/<locale>/reload")
def reload_locale(locale: str):
    """Re-read a catalogue from disk, keeping the old one if parsing fails."""

    catalog = current_registry().reload(locale)
    return jsonify({"locale": catalog.locale, "entries": len(catalog)}), 200
