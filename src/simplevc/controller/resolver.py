"""Controller resolution: ``request.attributes["_controller"]`` to ``(instance, method)``.

Accepted ``_controller`` shapes:

- ``(UserController, "show")``: the class is instantiated for this request
- ``(controller_instance, "show")``: the instance is used as-is
- ``("app.controllers.UserController", "show")``: imported, then instantiated
- ``"app.controllers.UserController::show"``: same, as one string
- ``"app.controllers:UserController::show"``: ``module:attribute`` form

The resolver does not judge the result: a reference it cannot turn into
a pair is returned unchanged, and the dispatcher rejects it.
"""

import importlib
from functools import lru_cache
from typing import Any

from simplevc.controller.controller import Controller
from simplevc.errors import ControllerNotFoundError
from simplevc.http.request import Request
from simplevc.view.naming import split_controller_reference


@lru_cache(maxsize=256)
def import_controller(identifier: str) -> Any:
    """Import ``"package.module.Name"`` or ``"package.module:Name"``.

    Raises:
        ControllerNotFoundError: If the module or attribute does not exist.
    """
    if ":" in identifier:
        module_path, _, attr_name = identifier.partition(":")
    else:
        module_path, _, attr_name = identifier.rpartition(".")

    if not module_path or not attr_name:
        msg = f"Controller `{identifier}` is not an importable `module.Name` path."
        raise ControllerNotFoundError(msg)

    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as exc:
        msg = f"Controller module `{module_path}` could not be imported."
        raise ControllerNotFoundError(msg) from exc

    try:
        return getattr(module, attr_name)
    except AttributeError as exc:
        msg = f"Controller `{attr_name}` not found in module `{module_path}`."
        raise ControllerNotFoundError(msg) from exc


class ControllerResolver:
    """Turn a request's ``_controller`` attribute into a ``(controller, method)`` pair."""

    __slots__ = ()

    def get_controller(self, request: Request) -> Any:
        """Return ``(controller, method)``, the unusable reference, or ``None``."""
        reference = request.attributes.get("_controller")
        if not reference:
            return None

        parts = split_controller_reference(reference)
        if parts is None:
            return reference

        controller, method = parts
        if isinstance(controller, str):
            controller = import_controller(controller)

        return self.instantiate(controller), method

    def instantiate(self, controller: Any) -> Any:
        """Create a fresh instance when *controller* is a ``Controller`` subclass."""
        if isinstance(controller, type) and issubclass(controller, Controller):
            return controller()
        return controller
