"""Error response rendering.

``ErrorRenderer.render(status, exception)`` turns a failure into a
``Response``: it reports the exception to the attached logger, records
it on the ``simplevc.server`` logger, and renders the ``ErrorView``.

If the error templates themselves are missing or broken, the renderer
falls back to a plain-text body with the standard reason phrase, so the
dispatcher always has a response to return.
"""

import logging
from http import HTTPStatus
from pathlib import Path

from simplevc.http.response import Response
from simplevc.view.error_view import ErrorView

logger = logging.getLogger("simplevc.server")


def reason_phrase(status: int) -> str:
    """``404`` -> ``"Not Found"``; unknown codes give ``"Error {status}"``."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return f"Error {status}"


class ErrorRenderer:
    """Render error pages and log the exceptions behind them."""

    __slots__ = ("_debug", "_logger", "_template_dir")

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        debug: bool | None = None,
        template_dir: str | Path | None = None,
    ) -> None:
        self._logger = logger
        self._debug = debug
        self._template_dir = template_dir

    @property
    def logger(self) -> logging.Logger | None:
        """The attached logger, if any."""
        return self._logger

    def set_logger(self, logger: logging.Logger | None) -> None:
        self._logger = logger

    def render(self, status: int, exception: BaseException | None = None) -> Response:
        """Render the error page for *status* into a ``Response``."""
        self._report(status, exception)

        try:
            view = ErrorView(self._template_dir, debug=self._debug)
            content = view.render_error(status, exception)
        except Exception:
            logger.exception("error page for %d could not be rendered", status)
            return Response(
                reason_phrase(status),
                status=status,
                content_type="text/plain; charset=utf-8",
            )

        return Response(content, status=status)

    def _report(self, status: int, exception: BaseException | None) -> None:
        if exception is None:
            return

        if self._logger is not None:
            try:
                self._logger.error(
                    str(exception),
                    exc_info=exception,
                    extra={"status_code": status},
                )
            except Exception:
                logger.exception("attached error logger failed")

        if status >= 500:
            logger.error("%d %s: %s", status, type(exception).__name__, exception, exc_info=exception)
        else:
            logger.debug("%d %s: %s", status, type(exception).__name__, exception)
