"""Render domain errors as ``{"message": ...}`` JSON responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from giving_server.core.errors import SERVER_ERROR_MESSAGE, GivingError, ServerError

logger = logging.getLogger(__name__)


def describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Request is invalid"
    error = errors[0]
    location = [str(part) for part in error.get("loc", ()) if part != "body"]
    field = ".".join(location)
    if not field:
        return "Request body is invalid"
    if error.get("type") == "missing":
        return f"{field} is required"
    return f"{field} is invalid: {error.get('msg', 'invalid value')}"


async def handle_giving_error(request: Request, exc: GivingError) -> JSONResponse:
    extra = {"path": request.url.path, "status_code": exc.status_code}
    if isinstance(exc, ServerError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, extra=extra)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message, extra=extra)
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = describe_validation_error(exc)
    logger.info("%s %s rejected: %s", request.method, request.url.path, message, extra={"path": request.url.path})
    return JSONResponse(status_code=400, content={"message": message})


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, extra={"path": request.url.path})
    return JSONResponse(status_code=500, content={"message": SERVER_ERROR_MESSAGE})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GivingError, handle_giving_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


__all__ = ["describe_validation_error", "register_error_handlers"]
