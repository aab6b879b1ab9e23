"""Application factory for studydeck localisation services."""

import logging
import os
from warnings import warn

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest

from studydeck.backend.catalog import (
    CatalogMissingError,
    DuplicateKeyError,
    MissingKeyError,
    ParseError,
)
from studydeck.backend.config import ConfigurationError, LocalizationSettings
from studydeck.backend.localization import CatalogRegistry, UnknownLocaleError
from studydeck.backend.version import get_project_version

from .http import REGISTRY_EXTENSION, current_registry, problem_response
from .routes import register_routes

logger = logging.getLogger(__name__)


def _parse_allowed_origins(raw: str | None) -> set[str]:
    """Convert an environment variable into a normalised set of origins."""

    if not raw:
        return set()

    return {origin.strip() for origin in raw.split(",") if origin.strip()}


def create_app(settings: LocalizationSettings | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)
    app.extensions[REGISTRY_EXTENSION] = CatalogRegistry(settings)

    allowed_origins = _parse_allowed_origins(os.getenv("STUDYDECK_ALLOWED_ORIGINS"))

    if not allowed_origins:
        warn(
            "No allowed origins configured; cross-origin requests will be rejected.",
            stacklevel=1,
        )

    CORS(
        app,
        resources={r"/api/*": {"origins": sorted(allowed_origins)}},
        supports_credentials=False,
        methods=["GET", "OPTIONS", "POST"],
        allow_headers=["Content-Type"],
    )

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        registry = current_registry()
        payload = {
            "status": "ok",
            "version": get_project_version(),
            "base_locale": registry.base_locale,
            "available_locales": list(registry.available_locales()),
        }
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(ParseError)
    def handle_parse_error(error: ParseError):
        """Surface broken catalogue files with the offending line."""

        logger.error("Catalogue parse failure: %s", error)
        return problem_response(
            "catalog_parse_error", status=422, message=str(error), line=error.line
        ).to_response()

    @app.errorhandler(DuplicateKeyError)
    def handle_duplicate_key(error: DuplicateKeyError):
        logger.error("Catalogue duplicate key: %s", error)
        return problem_response(
            "duplicate_key", status=422, message=str(error), key=error.key, line=error.line
        ).to_response()

    @app.errorhandler(MissingKeyError)
    def handle_missing_key(error: MissingKeyError):
        return problem_response(
            "missing_key", status=404, message=str(error), key=error.key
        ).to_response()

    @app.errorhandler(CatalogMissingError)
    def handle_catalog_missing(error: CatalogMissingError):
        logger.error("Catalogue file unavailable: %s", error)
        return problem_response(
            "catalog_missing", status=404, message=str(error), locale=error.locale
        ).to_response()

    @app.errorhandler(UnknownLocaleError)
    def handle_unknown_locale(error: UnknownLocaleError):
        return problem_response(
            "unknown_locale", status=404, message=str(error), locale=error.locale
        ).to_response()

    @app.errorhandler(ConfigurationError)
    def handle_configuration_error(error: ConfigurationError):
        logger.error("Localisation configuration error: %s", error)
        return problem_response(
            "configuration_error", status=500, message=str(error)
        ).to_response()

    return app
