"""Template renderer.

A ``View`` holds a template directory, an optional layout and a
write-once data bag. ``render()`` renders a template against the data
bag and, when a layout is set, renders the layout with the inner output
injected as ``content``::

    view = View("templates")
    view.set({"title": "Home"})
    html = view.render("pages/home.html")

Without a template name the view derives one from the request's
``_controller`` attribute: ``(UserController, "showProfile")`` renders
``User/show_profile.html``.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from simplevc.context import autoescape_var, get_template_dir
from simplevc.errors import (
    ConfigurationError,
    DuplicateKeyError,
    MissingControllerInfoError,
    MissingRequestError,
    TemplateNotFoundError,
    TemplateRenderError,
)
from simplevc.http.request import Request
from simplevc.templating import Markup, get_environment, is_template_error, render_template
from simplevc.view.naming import camel_to_snake, split_controller_reference, template_name

logger = logging.getLogger("simplevc.view")

DEFAULT_LAYOUT = "layouts/default.html"
TEMPLATE_EXTENSION = ".html"


class View:
    """Renders templates from one directory, optionally wrapped in a layout."""

    __slots__ = ("_autoescape", "_data", "_layout", "_request", "_template_dir")

    def __init__(
        self,
        template_dir: str | Path | None = None,
        layout: str | None = DEFAULT_LAYOUT,
        *,
        autoescape: bool | None = None,
    ) -> None:
        path = Path(template_dir if template_dir is not None else get_template_dir())
        if not path.is_dir():
            msg = f"Template path `{path}` does not exist."
            raise ConfigurationError(msg)

        self._template_dir: Path = path
        self._layout: str | None = layout
        self._request: Request | None = None
        self._data: dict[str, Any] = {}
        self._autoescape = autoescape if autoescape is not None else autoescape_var.get()

    # -- Accessors --

    @property
    def template_dir(self) -> Path:
        return self._template_dir

    @property
    def layout(self) -> str | None:
        return self._layout

    @property
    def request(self) -> Request | None:
        return self._request

    @property
    def data(self) -> Mapping[str, Any]:
        """Read-only view of the data bag."""
        return MappingProxyType(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    # -- Configuration --

    def set_layout(self, layout: str | None) -> View:
        """Replace the layout (``None`` renders templates bare). Chainable."""
        self._layout = layout
        return self

    def set_request(self, request: Request) -> View:
        """Attach the request used for template auto-detection. Chainable."""
        self._request = request
        return self

    def set(self, data: Mapping[str, Any]) -> View:
        """Add *data* to the data bag. Chainable.

        Keys are write-once. Keys are inserted left to right; on a
        duplicate, the keys before it stay applied.

        Raises:
            DuplicateKeyError: If a key is already in the data bag.
        """
        for key, value in data.items():
            if key in self._data:
                raise DuplicateKeyError(key)
            self._data[key] = value
        return self

    # -- Rendering --

    def render(self, template: str | None = None) -> str:
        """Render *template* (or the auto-detected one) and wrap it in the layout."""
        if template is None:
            template = self.auto_detect_template()

        content = self.render_file(template, self._data)

        if self._layout is not None:
            return self.render_file(self._layout, {**self._data, "content": Markup(content)})

        return content

    def render_file(self, name: str, data: Mapping[str, Any]) -> str:
        """Render one template file against *data*.

        Raises:
            TemplateNotFoundError: If the file does not exist.
            TemplateRenderError: If the engine fails or returns a non-string.
        """
        file_path = self._template_dir / name
        if not file_path.is_file():
            msg = f"Template file `{file_path}` not found."
            raise TemplateNotFoundError(msg)

        env = get_environment(self._template_dir, autoescape=self._autoescape)
        try:
            result = render_template(env, name, data)
        except Exception as exc:
            if not is_template_error(exc):
                raise
            msg = f"Template file `{file_path}` failed to render: {exc}"
            raise TemplateRenderError(msg) from exc

        if not isinstance(result, str):
            msg = f"Template file `{file_path}` returned invalid output."
            raise TemplateRenderError(msg)

        logger.debug("rendered %s", name)
        return result

    def auto_detect_template(self) -> str:
        """Derive ``Controller/action.html`` from the request's ``_controller``.

        Raises:
            MissingRequestError: If no request was set.
            MissingControllerInfoError: If the request has no usable
                ``_controller`` attribute.
        """
        if self._request is None:
            msg = "Request not set. Call `set_request()` before `render()`."
            raise MissingRequestError(msg)

        reference = self._request.attributes.get("_controller")
        if not reference:
            msg = "`_controller` attribute not found in the request."
            raise MissingControllerInfoError(msg)

        parts = split_controller_reference(reference)
        if parts is None or not isinstance(parts[1], str):
            msg = f"Cannot derive a template name from `_controller` {reference!r}."
            raise MissingControllerInfoError(msg)

        controller, method = parts
        return template_name(controller, method, TEMPLATE_EXTENSION)

    @staticmethod
    def camel_to_snake(text: str) -> str:
        return camel_to_snake(text)
