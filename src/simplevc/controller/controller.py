"""Controller base class.

Subclass ``Controller`` and add public methods. A method may return a
``Response``; if it returns anything else the dispatcher renders the
controller's view with the auto-detected template::

    class UserController(Controller):
        def show(self, id: int) -> None:
            self.set({"user": load_user(id)})      # renders User/show.html

        def export(self, id: int) -> Response:
            return Response.json(load_user(id).to_dict())
"""

from collections.abc import Mapping
from typing import Any

from simplevc.http.response import Response
from simplevc.view.view import View


class Controller:
    """Base class for request-handling controllers.

    Each instance owns exactly one ``View``, created at construction.
    """

    def __init__(self) -> None:
        self._view = View()

    @property
    def view(self) -> View:
        return self._view

    def get_view(self) -> View:
        """Return the view owned by this controller."""
        return self._view

    def set(self, data: Mapping[str, Any]) -> None:
        """Add *data* to the view's data bag (keys are write-once)."""
        self._view.set(data)

    def render(self, template: str | None = None) -> Response:
        """Render the view into a 200 ``Response``."""
        return Response(self._view.render(template))
