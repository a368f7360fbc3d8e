"""Tests for simplevc.routing.loader — routes files."""

from pathlib import Path

import pytest

from simplevc.errors import ConfigurationError
from simplevc.routing import RouteCollection, load_routes


class TestLoadRoutes:
    def test_collection_passes_through(self) -> None:
        routes = RouteCollection()
        assert load_routes(routes) is routes

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="does not exist"):
            load_routes(tmp_path / "nope.py")

    def test_directory_is_not_a_routes_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="does not exist"):
            load_routes(tmp_path)

    def test_file_without_routes(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.py"
        path.write_text("value = 1\n")
        with pytest.raises(ConfigurationError, match="must define `routes`"):
            load_routes(path)

    def test_wrong_type(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.py"
        path.write_text("routes = ['not', 'a', 'collection']\n")
        with pytest.raises(ConfigurationError, match="RouteCollection"):
            load_routes(str(path))

    def test_import_failure(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.py"
        path.write_text("import simplevc_missing_module\n")
        with pytest.raises(ConfigurationError, match="failed to load") as exc_info:
            load_routes(path)
        assert isinstance(exc_info.value.__cause__, ModuleNotFoundError)

    def test_syntax_error(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.py"
        path.write_text("routes = (\n")
        with pytest.raises(ConfigurationError, match="failed to load"):
            load_routes(path)

    def test_module_level_collection(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.py"
        path.write_text(
            "from simplevc.routing import Route, RouteCollection\n"
            "routes = RouteCollection()\n"
            "routes.add('home', Route('/'))\n"
        )
        routes = load_routes(path)
        assert routes.names() == ["home"]

    def test_factory_function(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.py"
        path.write_text(
            "from simplevc.routing import Route, RouteCollection\n"
            "def routes():\n"
            "    return RouteCollection().add('about', Route('/about'))\n"
        )
        assert load_routes(path).names() == ["about"]

    def test_sample_app_routes(self, routes_file: Path) -> None:
        routes = load_routes(routes_file)
        assert "ok" in routes
        assert routes.get("show").path == "/show/{id:int}"  # type: ignore[union-attr]
