import logging
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from logbook.errors import LogbookError, SenderNotAllowlisted

logger = logging.getLogger("logbook.errors")

def register_error_handlers(app: FastAPI):
    @app.exception_handler(SenderNotAllowlisted)
    async def ignored_sender_handler(request: Request, exc: SenderNotAllowlisted):
        # Same answer as a stored message; the webhook sees every chat member
        logger.debug("Ignored update path=%s reason=%s", request.url.path, exc)
        return Response(status_code=200)

    @app.exception_handler(LogbookError)
    async def logbook_exc_handler(request: Request, exc: LogbookError):
        if exc.status_code >= 500:
            logger.error(
                "%s path=%s detail=%s",
                type(exc).__name__, request.url.path, exc
            )
        else:
            logger.warning(
                "%s path=%s status=%s detail=%s",
                type(exc).__name__, request.url.path, exc.status_code, exc
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc) or type(exc).__name__},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(
            "HTTPException path=%s status=%s detail=%r",
            request.url.path, exc.status_code, exc.detail
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail) if exc.detail else "HTTP error"},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            "ValidationError path=%s errors=%s",
            request.url.path, exc.errors()
        )
        return JSONResponse(
            status_code=422,
            content={"error": "Validation error", "details": exc.errors()},
        )

    @app.exception_handler(Exception)
    async def unhandled_exc_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error at path=%s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )
