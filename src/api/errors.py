"""Shared error formatting.

Every failure leaving the API, whether a tagged domain error, a request
validation failure, an HTTPException or an unexpected exception, is rendered
with the same body:

    {"statusCode": 409, "error": "EMAIL_ALREADY_TAKEN_ERROR",
     "description": "Email is already registered", "message": "This email already taken"}
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from domain.model.errors import DomainError, ErrorType

logger = logging.getLogger(__name__)

_TYPES_BY_STATUS = {
    ErrorType.VALIDATION.status: ErrorType.VALIDATION,
    ErrorType.UNAUTHORIZED.status: ErrorType.UNAUTHORIZED,
    ErrorType.NOT_FOUND.status: ErrorType.NOT_FOUND,
    ErrorType.UNPROCESSABLE_ENTITY.status: ErrorType.UNPROCESSABLE_ENTITY,
    ErrorType.SERVER.status: ErrorType.SERVER,
    ErrorType.SERVICE_UNAVAILABLE.status: ErrorType.SERVICE_UNAVAILABLE,
}


def error_body(error_type: ErrorType, message: str) -> dict:
    return {
        "statusCode": error_type.status,
        "error": error_type.code,
        "description": error_type.description,
        "message": message,
    }


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # loc is ("body", "email") etc.; the first element is the request part
        field = ".".join(str(p) for p in err.get("loc", ())[1:])
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or ErrorType.VALIDATION.description


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    error_type = exc.error_type
    log = logger.error if error_type.status >= 500 else logger.info
    log("Request failed", extra={
        "path": request.url.path,
        "error": error_type.code,
        "detail": exc.message,
    })
    return JSONResponse(status_code=error_type.status, content=error_body(error_type, exc.message))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _format_validation_errors(exc)
    logger.info("Request validation failed", extra={"path": request.url.path, "detail": message})
    return JSONResponse(
        status_code=ErrorType.VALIDATION.status,
        content=error_body(ErrorType.VALIDATION, message),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    error_type = _TYPES_BY_STATUS.get(exc.status_code)
    message = str(exc.detail)
    if error_type is None:
        content = {
            "statusCode": exc.status_code,
            "error": "HTTP_ERROR",
            "description": message,
            "message": message,
        }
    else:
        content = error_body(error_type, message)
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"path": request.url.path})
    return JSONResponse(
        status_code=ErrorType.SERVER.status,
        content=error_body(ErrorType.SERVER, ErrorType.SERVER.description),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the shared error formatters on the app."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
