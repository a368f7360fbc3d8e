"""Error pages and error logging."""

from simplevc.error.console import ConsoleHandler, console_logger
from simplevc.error.renderer import ErrorRenderer

__all__ = ["ConsoleHandler", "ErrorRenderer", "console_logger"]
