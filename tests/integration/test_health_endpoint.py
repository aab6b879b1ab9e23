"""Integration tests for application endpoints."""

from http import HTTPStatus

from flask.testing import FlaskClient

from studydeck.backend.config import available_locales
from studydeck.backend.version import get_project_version


def test_health_endpoint(client: FlaskClient) -> None:
    """Ensure the health endpoint returns a successful status payload."""
    response = client.get("/health")
    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["status"] == "ok"
    assert payload["version"] == get_project_version()
    assert payload["base_locale"] == "en"
    assert payload["available_locales"] == list(available_locales())
    assert response.mimetype == "application/json"


def test_health_endpoint_reports_fixture_manifest(fixture_client: FlaskClient) -> None:
    payload = fixture_client.get("/health").get_json()

    assert payload["available_locales"] == ["en", "es", "pt-br"]
