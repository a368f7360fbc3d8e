"""Controllers and the resolvers that turn route attributes into calls."""

from simplevc.controller.arguments import ArgumentResolver
from simplevc.controller.controller import Controller
from simplevc.controller.resolver import ControllerResolver

__all__ = ["ArgumentResolver", "Controller", "ControllerResolver"]
