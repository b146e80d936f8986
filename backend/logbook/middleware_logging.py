import logging
import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Liveness checks are polled often; keep them out of INFO output
QUIET_PATHS = {"/health"}

logger = logging.getLogger("logbook.request")


def configure_logging(level: str = "INFO") -> None:
    """Install the console handler and set the level of the logbook loggers."""
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    logging.getLogger("logbook").setLevel(level.upper())


class RequestLogMiddleware(BaseHTTPMiddleware):
    """One line per request: client, method, path, status and timing."""

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        client = request.client.host if request.client else "-"
        # Path only: the webhook query string carries the shared secret
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "client=%s method=%s path=%s status=500 duration_ms=%.2f unhandled",
                client, request.method, path, _elapsed_ms(start)
            )
            raise

        level = logging.DEBUG if path in QUIET_PATHS else logging.INFO
        logger.log(
            level, "client=%s method=%s path=%s status=%s duration_ms=%.2f",
            client, request.method, path, response.status_code, _elapsed_ms(start)
        )
        return response


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


def register_request_logging(app):
    app.add_middleware(RequestLogMiddleware)
