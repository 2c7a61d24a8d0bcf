"""
app/core/error_handlers.py
Render every failure as a response envelope
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import ValidationError
from app.core.logging import logger
from app.utils.response_helper import error_response, INTERNAL_ERROR_MESSAGE


def _describe_request_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


async def validation_exception_handler(request: Request, exc: ValidationError):
    logger.info("Validation failed on %s %s: %s", request.method, request.url.path, exc.message)
    return error_response(exc.message, status.HTTP_400_BAD_REQUEST)


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    message = _describe_request_errors(exc)
    logger.info("Invalid request on %s %s: %s", request.method, request.url.path, message)
    return error_response(message, status.HTTP_400_BAD_REQUEST)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code >= 500:
        logger.error("%s: %s %s | detail=%s", exc.status_code, request.method, request.url.path, exc.detail)
    elif exc.status_code in (401, 403):
        logger.warning("%s: %s %s | detail=%s", exc.status_code, request.method, request.url.path, exc.detail)
    return error_response(str(exc.detail), exc.status_code, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
