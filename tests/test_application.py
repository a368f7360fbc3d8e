"""Tests for simplevc.app — dispatch, error mapping, sessions and ASGI."""

import logging
from pathlib import Path

import pytest

from simplevc.app import App, get_instance, init
from simplevc.config import AppConfig
from simplevc.context import get_template_dir, request_var
from simplevc.error.renderer import ErrorRenderer
from simplevc.errors import (
    ArgumentResolutionError,
    ConfigurationError,
    ControllerNotFoundError,
    InvalidControllerShapeError,
    InvalidControllerTypeError,
    InvalidMethodError,
    MethodNotAllowed,
    NotInitializedError,
    RouteNotFoundError,
)
from simplevc.http.request import Request
from simplevc.http.response import Response
from simplevc.routing import RouteCollection
from simplevc.testing import TestClient


class RecordingHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


class ExplodingRenderer(ErrorRenderer):
    def render(self, status: int, exception: BaseException | None = None) -> Response:
        raise RuntimeError("renderer down")


@pytest.fixture
def app(routes_file: Path, config: AppConfig) -> App:
    return App(routes_file, config=config)


@pytest.fixture
def recorder() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def logged_app(routes_file: Path, templates_dir: Path, recorder: RecordingHandler) -> App:
    logger = logging.Logger("test.app", logging.DEBUG)
    logger.addHandler(recorder)
    renderer = ErrorRenderer(logger, template_dir=templates_dir)
    return App(
        routes_file,
        config=AppConfig(template_dir=str(templates_dir)),
        error_renderer=renderer,
    )


def _get(app: App, path: str, **kwargs) -> Response:
    return app.handle(Request.create(path, **kwargs))


def _logged_exception(recorder: RecordingHandler) -> BaseException:
    (record,) = recorder.records
    assert record.exc_info is not None
    return record.exc_info[1]


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestAppConstruction:
    def test_accepts_route_collection(self, routes: RouteCollection, config: AppConfig) -> None:
        app = App(routes, config=config)
        assert app.routes is routes
        assert app.router.match("GET", "/ok").route.name == "ok"

    def test_loads_routes_file_from_config(self, routes_file: Path, templates_dir: Path) -> None:
        app = App(config=AppConfig(template_dir=str(templates_dir), routes_file=routes_file))
        assert "ok" in app.routes

    def test_missing_routes_file(self, tmp_path: Path, config: AppConfig) -> None:
        with pytest.raises(ConfigurationError):
            App(tmp_path / "routes.py", config=config)

    def test_default_error_renderer_uses_console_logger(self, app: App) -> None:
        assert app.error_renderer.logger is not None
        assert app.error_renderer.logger.name == "simplevc.console"


# ---------------------------------------------------------------------------
# Successful dispatch
# ---------------------------------------------------------------------------


class TestDispatch:
    def test_returned_response_is_used_as_is(self, app: App) -> None:
        response = _get(app, "/ok")
        assert response.status == 200
        assert response.text == "ok"

    def test_implicit_render_with_layout(self, app: App) -> None:
        response = _get(app, "/implicit")
        assert response.status == 200
        assert response.text.strip() == "<main>Implicit: implicit</main>"

    def test_template_derived_from_controller_name(self, app: App) -> None:
        assert "Dashboard for admin" in _get(app, "/admin").text

    def test_path_parameter_converted_to_annotation(self, app: App) -> None:
        assert "Show 42 (int)" in _get(app, "/show/42").text

    def test_explicit_template(self, app: App) -> None:
        assert _get(app, "/explicit").text.strip() == "<main>Hello explicit</main>"

    def test_redirect(self, app: App) -> None:
        response = _get(app, "/go-home")
        assert response.status == 302
        assert response.location == "/ok"

    def test_route_name_attribute(self, app: App) -> None:
        assert _get(app, "/route-name").text == "route_name"

    def test_string_controller_reference(self, app: App) -> None:
        assert _get(app, "/by-string").text == "ok"

    def test_dataclass_from_query(self, app: App) -> None:
        response = _get(app, "/search", parameters={"q": "desk", "page": "3"})
        assert response.text == "q=desk page=3"

    def test_dataclass_from_form_body(self, app: App) -> None:
        response = _get(app, "/search", method="POST", parameters={"q": "lamp"})
        assert response.text == "q=lamp page=1"

    def test_head_falls_back_to_get_route(self, app: App) -> None:
        response = _get(app, "/ok", method="HEAD")
        assert response.status == 200

    def test_context_is_reset_after_handle(self, app: App) -> None:
        _get(app, "/implicit")
        with pytest.raises(LookupError):
            request_var.get()
        assert Path(get_template_dir()) == Path(app.config.template_dir)

    def test_context_is_reset_after_error(self, app: App) -> None:
        _get(app, "/boom")
        with pytest.raises(LookupError):
            request_var.get()

    def test_requests_do_not_share_state(self, app: App) -> None:
        first = _get(app, "/implicit")
        second = _get(app, "/implicit")
        assert first.text == second.text

    def test_autoescape_on_by_default(self, app: App) -> None:
        assert "&lt;b&gt;bold" in _get(app, "/escape").text

    def test_autoescape_from_config(self, routes_file: Path, templates_dir: Path) -> None:
        app = App(routes_file, config=AppConfig(template_dir=str(templates_dir), autoescape=False))
        text = _get(app, "/escape").text
        assert "<b>bold</b>" in text
        assert "&lt;" not in text


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


class TestErrorMapping:
    def test_unknown_path_is_404(self, logged_app: App, recorder: RecordingHandler) -> None:
        response = _get(logged_app, "/nope")
        assert response.status == 404
        assert "Error response: error 404" in response.text
        assert '<div class="error">' in response.text
        assert isinstance(_logged_exception(recorder), RouteNotFoundError)

    def test_converter_mismatch_is_404(self, app: App) -> None:
        assert _get(app, "/show/abc").status == 404

    def test_wrong_method_is_405_with_allow(self, logged_app: App, recorder: RecordingHandler) -> None:
        response = _get(logged_app, "/post-only")
        assert response.status == 405
        assert response.get_header("Allow") == "POST"
        assert "Error response: error 405" in response.text
        assert isinstance(_logged_exception(recorder), MethodNotAllowed)

    def test_uncaught_exception_is_500(self, logged_app: App, recorder: RecordingHandler) -> None:
        response = _get(logged_app, "/boom")
        assert response.status == 500
        assert "Error response: fatal 500" in response.text
        exc = _logged_exception(recorder)
        assert isinstance(exc, RuntimeError)
        assert str(exc) == "boom"

    def test_http_error_keeps_its_status(self, app: App) -> None:
        response = _get(app, "/forbidden")
        assert response.status == 403
        assert "Error response: error 403" in response.text

    @pytest.mark.parametrize(
        ("path", "error_type"),
        [
            ("/no-controller", ControllerNotFoundError),
            ("/bad-shape", InvalidControllerShapeError),
            ("/by-action", InvalidControllerShapeError),
            ("/not-a-controller", InvalidControllerTypeError),
            ("/bad-method-type", InvalidMethodError),
            ("/private", InvalidMethodError),
            ("/not-callable", InvalidMethodError),
            ("/unknown-method", InvalidMethodError),
            ("/needs-argument", ArgumentResolutionError),
        ],
    )
    def test_dispatch_failures_are_500(
        self,
        logged_app: App,
        recorder: RecordingHandler,
        path: str,
        error_type: type[Exception],
    ) -> None:
        response = _get(logged_app, path)
        assert response.status == 500
        assert isinstance(_logged_exception(recorder), error_type)

    def test_debug_exposes_exception_message(self, routes_file: Path, templates_dir: Path) -> None:
        app = App(routes_file, config=AppConfig(template_dir=str(templates_dir), debug=True))
        assert "boom" in _get(app, "/boom").text

    def test_exception_hidden_without_debug(self, app: App) -> None:
        assert "boom" not in _get(app, "/boom").text

    def test_failing_renderer_falls_back_to_plain_text(
        self, routes_file: Path, config: AppConfig
    ) -> None:
        app = App(routes_file, config=config, error_renderer=ExplodingRenderer())
        response = _get(app, "/boom")
        assert response.status == 500
        assert response.text == "Internal Server Error"

    def test_missing_error_templates_fall_back(self, routes_file: Path, tmp_path: Path) -> None:
        app = App(routes_file, config=AppConfig(template_dir=str(tmp_path)))
        response = _get(app, "/nope")
        assert response.status == 404
        assert response.text == "Not Found"


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


class TestSessions:
    def test_session_survives_requests(self, routes_file: Path, templates_dir: Path) -> None:
        app = App(
            routes_file,
            config=AppConfig(template_dir=str(templates_dir), secret_key="s3cret"),
        )
        client = TestClient(app)

        assert "Visits: 1" in client.get("/counter").text
        assert "Visits: 2" in client.get("/counter").text
        assert "simplevc_session" in client.cookies

    def test_unmodified_session_sets_no_cookie(self, routes_file: Path, templates_dir: Path) -> None:
        app = App(
            routes_file,
            config=AppConfig(template_dir=str(templates_dir), secret_key="s3cret"),
        )
        assert _get(app, "/ok").cookies == ()

    def test_no_secret_key_no_session(self, app: App) -> None:
        response = _get(app, "/counter")
        assert response.status == 500


# ---------------------------------------------------------------------------
# Process-wide instance
# ---------------------------------------------------------------------------


class TestInstance:
    def test_get_instance_before_init(self) -> None:
        with pytest.raises(NotInitializedError, match="not initialized"):
            get_instance()

    def test_init_is_idempotent(self, routes_file: Path, config: AppConfig) -> None:
        first = init(routes_file, config=config)
        second = init()
        assert first is second
        assert get_instance() is first


# ---------------------------------------------------------------------------
# ASGI
# ---------------------------------------------------------------------------


def _scope(method: str, path: str, query: bytes = b"", headers: list | None = None) -> dict:
    return {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query,
        "headers": [(b"host", b"testserver"), *(headers or [])],
        "scheme": "http",
        "server": ("testserver", 80),
    }


def _receiver(*messages: dict):
    queue = list(messages)

    async def receive() -> dict:
        return queue.pop(0)

    return receive


def _sender():
    sent: list[dict] = []

    async def send(message: dict) -> None:
        sent.append(message)

    return send, sent


class TestASGI:
    async def test_get(self, app: App) -> None:
        send, sent = _sender()
        await app(_scope("GET", "/ok"), _receiver({"type": "http.request", "body": b""}), send)

        start, body = sent
        assert start["type"] == "http.response.start"
        assert start["status"] == 200
        assert (b"content-length", b"2") in start["headers"]
        assert body == {"type": "http.response.body", "body": b"ok"}

    async def test_head_sends_no_body(self, app: App) -> None:
        send, sent = _sender()
        await app(_scope("HEAD", "/ok"), _receiver({"type": "http.request", "body": b""}), send)

        start, body = sent
        assert start["status"] == 200
        assert (b"content-length", b"2") in start["headers"]
        assert body["body"] == b""

    async def test_post_body_in_chunks(self, app: App) -> None:
        send, sent = _sender()
        scope = _scope(
            "POST",
            "/search",
            headers=[(b"content-type", b"application/x-www-form-urlencoded")],
        )
        receive = _receiver(
            {"type": "http.request", "body": b"q=ch", "more_body": True},
            {"type": "http.request", "body": b"air&page=2"},
        )
        await app(scope, receive, send)
        assert sent[1]["body"] == b"q=chair page=2"

    async def test_error_status_sent(self, app: App) -> None:
        send, sent = _sender()
        await app(_scope("GET", "/nope"), _receiver({"type": "http.request"}), send)
        assert sent[0]["status"] == 404

    async def test_redirect_location_header(self, app: App) -> None:
        send, sent = _sender()
        await app(_scope("GET", "/go-home"), _receiver({"type": "http.request"}), send)
        assert sent[0]["status"] == 302
        assert (b"location", b"/ok") in sent[0]["headers"]

    async def test_lifespan(self, app: App) -> None:
        send, sent = _sender()
        receive = _receiver({"type": "lifespan.startup"}, {"type": "lifespan.shutdown"})
        await app({"type": "lifespan"}, receive, send)
        assert sent == [
            {"type": "lifespan.startup.complete"},
            {"type": "lifespan.shutdown.complete"},
        ]

    async def test_websocket_scope_ignored(self, app: App) -> None:
        send, sent = _sender()
        await app({"type": "websocket"}, _receiver(), send)
        assert sent == []
