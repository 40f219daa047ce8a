"""Error Handlers — every failure leaves the API as the DevLinkError envelope.

Invariants:
    - DevLinkError -> its own http_status and to_response()
    - FastAPI RequestValidationError (path/query coercion) -> RequestValidationFailed, 400
    - Anything else -> InternalError, 500, fixed message; the traceback is only logged

Design Decisions:
    - Framework errors are converted into domain errors, so one function renders all three
    - Client errors logged at warning, server errors at error
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from devlink.core.errors import DevLinkError, InternalError, RequestValidationFailed

logger = logging.getLogger(__name__)


def _render(request: Request, exc: DevLinkError) -> JSONResponse:
    log = logger.warning if exc.is_client_error else logger.error
    log(
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _violations(exc: RequestValidationError) -> list[dict]:
    # loc starts with "path"/"query"/"body"; callers only care about the field
    return [
        {
            "field": ".".join(str(part) for part in e["loc"][1:]) or str(e["loc"][0]),
            "message": e["msg"],
        }
        for e in exc.errors()
    ]


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain, framework-validation and catch-all handlers."""

    @app.exception_handler(DevLinkError)
    async def devlink_error_handler(request: Request, exc: DevLinkError):
        return _render(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError,
    ):
        return _render(request, RequestValidationFailed(_violations(exc)))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.url.path}",
            exc_info=exc,
            extra={"path": request.url.path},
        )
        return _render(request, InternalError())
