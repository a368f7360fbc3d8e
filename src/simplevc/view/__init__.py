"""Template-rendering views owned by controllers and the error renderer."""

from simplevc.view.error_view import ErrorView
from simplevc.view.naming import camel_to_snake
from simplevc.view.view import View

__all__ = ["ErrorView", "View", "camel_to_snake"]
