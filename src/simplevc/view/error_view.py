"""Error page view.

Renders ``errors/400.html`` for statuses below 500 and ``errors/500.html``
otherwise, inside the ``layouts/error.html`` layout. Templates receive
``status_code``, plus ``exception`` when debug mode is on.
"""

from pathlib import Path
from typing import Any

from simplevc.env import debug_enabled
from simplevc.templating import Markup
from simplevc.view.view import View

ERROR_LAYOUT = "layouts/error.html"
CLIENT_ERROR_TEMPLATE = "errors/400.html"
SERVER_ERROR_TEMPLATE = "errors/500.html"


class ErrorView(View):
    """A View preconfigured for error pages."""

    __slots__ = ("_debug",)

    def __init__(
        self,
        template_dir: str | Path | None = None,
        *,
        debug: bool | None = None,
        autoescape: bool | None = None,
    ) -> None:
        super().__init__(template_dir, layout=ERROR_LAYOUT, autoescape=autoescape)
        self._debug = debug

    @property
    def debug(self) -> bool:
        """Explicit debug flag, else ``DEBUG`` from the environment."""
        if self._debug is not None:
            return self._debug
        return debug_enabled()

    def determine_template(self, status_code: int) -> str:
        return CLIENT_ERROR_TEMPLATE if status_code < 500 else SERVER_ERROR_TEMPLATE

    def render_error(self, status_code: int, exception: BaseException | None = None) -> str:
        """Render the error page for *status_code*.

        The exception is only exposed to templates in debug mode.
        """
        template = self.determine_template(status_code)

        data: dict[str, Any] = {"status_code": status_code}
        if self.debug and exception is not None:
            data["exception"] = exception

        content = self.render_file(template, data)

        if self.layout is not None:
            return self.render_file(self.layout, {**data, "content": Markup(content)})

        return content
