"""Shared fixtures: test templates, the sample app's routes, a clean environment."""

from pathlib import Path

import pytest

from simplevc.app import _reset_instance
from simplevc.config import AppConfig
from simplevc.routing import RouteCollection, load_routes

TESTS_DIR = Path(__file__).parent
TEMPLATES_DIR = TESTS_DIR / "templates"
ROUTES_FILE = TESTS_DIR / "sample_app" / "config" / "routes.py"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Unset ``DEBUG``, point ``TEMPLATES`` at the test templates, reset ``init()``."""
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.setenv("TEMPLATES", str(TEMPLATES_DIR))
    yield
    _reset_instance()


@pytest.fixture
def templates_dir() -> Path:
    return TEMPLATES_DIR


@pytest.fixture
def routes_file() -> Path:
    return ROUTES_FILE


@pytest.fixture
def routes() -> RouteCollection:
    return load_routes(ROUTES_FILE)


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(template_dir=str(TEMPLATES_DIR))
