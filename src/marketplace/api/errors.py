"""Exception handlers that render every failure in the response envelope.

Domain errors propagate out of command handlers untouched; this module is
the single place that maps them to HTTP status codes.
"""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException

from marketplace.exceptions import AccessDenied, first_message

logger = structlog.get_logger(__name__)


def envelope(status_code: int, message: str, data=None, headers=None) -> JSONResponse:
    content = {"success": False, "message": message}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def domain_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, error=type(exc).__name__)
    return envelope(status.HTTP_400_BAD_REQUEST, first_message(exc), {"errors": getattr(exc, "messages", None)})


async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    message = first_message(exc)
    if not message or message.startswith("{"):
        message = "Not found"
    return envelope(status.HTTP_404_NOT_FOUND, message)


async def access_denied_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.info("access_denied", path=request.url.path, reason=getattr(exc, "message", str(exc)))
    return envelope(status.HTTP_403_FORBIDDEN, getattr(exc, "message", "Access denied"))


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    http_exc = exc if isinstance(exc, HTTPException) else HTTPException(status_code=500, detail=str(exc))
    return envelope(http_exc.status_code, str(http_exc.detail), headers=http_exc.headers)


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = []
    if isinstance(exc, RequestValidationError):
        errors = [
            {"field": ".".join(str(loc) for loc in error["loc"]), "message": error["msg"]} for error in exc.errors()
        ]
    logger.info("request_validation_failed", path=request.url.path, errors=errors)
    return envelope(status.HTTP_400_BAD_REQUEST, "Validation failed", {"errors": errors})


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", method=request.method, path=request.url.path)
    return envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, domain_validation_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(AccessDenied, access_denied_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, internal_error_handler)
