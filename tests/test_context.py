"""Tests for simplevc.context — request and template-directory ContextVars."""

from pathlib import Path

import pytest

from simplevc.app import App
from simplevc.config import AppConfig
from simplevc.context import get_request, get_template_dir, request_var, template_dir_var
from simplevc.controller.controller import Controller
from simplevc.http.request import Request
from simplevc.http.response import Response
from simplevc.routing import Route, RouteCollection


class ContextController(Controller):
    def current(self, request: Request) -> Response:
        assert get_request() is request
        return Response(f"{get_request().path} {self.view.template_dir.name}")


class TestRequestVar:
    def test_get_request_raises_outside_context(self) -> None:
        with pytest.raises(LookupError):
            get_request()

    def test_set_and_get_request(self) -> None:
        request = Request.create("/test")
        token = request_var.set(request)
        try:
            assert get_request() is request
            assert get_request().path == "/test"
        finally:
            request_var.reset(token)

    def test_available_during_dispatch(self, tmp_path: Path) -> None:
        routes = RouteCollection().add(
            "current", Route("/current", {"_controller": (ContextController, "current")})
        )
        app = App(routes, config=AppConfig(template_dir=str(tmp_path)))

        response = app.handle(Request.create("/current"))

        assert response.text == f"/current {tmp_path.name}"


class TestTemplateDir:
    def test_falls_back_to_environment(self, templates_dir: Path) -> None:
        assert Path(get_template_dir()) == templates_dir

    def test_default_without_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TEMPLATES")
        assert get_template_dir() == "templates"

    def test_context_value_wins(self, tmp_path: Path) -> None:
        token = template_dir_var.set(tmp_path)
        try:
            assert get_template_dir() == tmp_path
        finally:
            template_dir_var.reset(token)
