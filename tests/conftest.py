"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from studydeck.backend.app import create_app  # noqa: E402
from studydeck.backend.config import LocalizationSettings, load_manifest  # noqa: E402

MANIFEST = """\
base_locale: en
locales:
  - code: en
    name: English
  - code: es
    name: Español
  - code: pt-br
    name: Português (Brasil)
    file: pt_BR.ftl
"""

EN_CATALOG = """\
## Menu Bar
view = View
about = About

## Dialogs
cancel = Cancel
ok = Ok
ok-status = Ok
greeting = Hello { $name }
"""

ES_CATALOG = """\
## Menu Bar
view = Ver
about = Acerca de

## Dialogs
cancel = Cancelar
ok = Vale
ok-status = Bien
greeting = Hola { $name }
"""

PT_BR_CATALOG = """\
view = Ver
about = Sobre
cancel = Cancelar
ok = Ok
ok-status = Ok
greeting = Olá { $name }
"""


@pytest.fixture(autouse=True)
def _clear_manifest_cache():
    load_manifest.cache_clear()
    yield
    load_manifest.cache_clear()


@pytest.fixture()
def translations_dir(tmp_path: Path) -> Path:
    """Write a small manifest with three catalogues into a temporary directory."""

    directory = tmp_path / "translations"
    directory.mkdir()
    directory.joinpath("manifest.yaml").write_text(MANIFEST, encoding="utf-8")
    directory.joinpath("en.ftl").write_text(EN_CATALOG, encoding="utf-8")
    directory.joinpath("es.ftl").write_text(ES_CATALOG, encoding="utf-8")
    directory.joinpath("pt_BR.ftl").write_text(PT_BR_CATALOG, encoding="utf-8")
    return directory


@pytest.fixture()
def settings(translations_dir: Path) -> LocalizationSettings:
    return LocalizationSettings(translations_dir=translations_dir)


@pytest.fixture()
def app() -> Flask:
    """Return an application serving the packaged catalogues."""

    application = create_app()
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()


@pytest.fixture()
def fixture_app(settings: LocalizationSettings) -> Flask:
    """Return an application serving the temporary catalogues."""

    application = create_app(settings)
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def fixture_client(fixture_app: Flask) -> FlaskClient:
    return fixture_app.test_client()
