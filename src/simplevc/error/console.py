"""Debug-gated console logging.

``console_logger()`` builds the logger an ``App`` attaches to its error
renderer when none is given. Its handler writes each message, followed by
the exception traceback when there is one, and stays silent unless debug
mode is on::

    log = console_logger(io.StringIO(), debug=True)
    log.error("boom", exc_info=exc)

Log levels are not filtered: in debug mode everything is written.
"""

import logging
from typing import IO

from simplevc.env import debug_enabled


class ConsoleHandler(logging.StreamHandler):
    """StreamHandler that only emits while debug mode is on.

    The debug flag is read on every record, so toggling ``DEBUG`` in the
    environment takes effect immediately. The stream is never closed.
    """

    def __init__(self, stream: IO[str] | None = None, *, debug: bool | None = None) -> None:
        super().__init__(stream)
        self._debug = debug
        self.setFormatter(logging.Formatter("%(message)s"))

    @property
    def debug(self) -> bool:
        if self._debug is not None:
            return self._debug
        return debug_enabled()

    def emit(self, record: logging.LogRecord) -> None:
        if not self.debug:
            return
        super().emit(record)


def console_logger(stream: IO[str] | None = None, *, debug: bool | None = None) -> logging.Logger:
    """Return a standalone logger writing to *stream* (default ``sys.stderr``).

    The logger is not registered with the logging manager and does not
    propagate, so it never duplicates records into the root handlers.
    """
    logger = logging.Logger("simplevc.console", logging.DEBUG)
    logger.propagate = False
    logger.addHandler(ConsoleHandler(stream, debug=debug))
    return logger
