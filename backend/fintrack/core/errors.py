# fintrack/core/errors.py
"""Domain error types and the FastAPI handlers that render them.

Services raise these; the handlers registered in ``register_exception_handlers``
turn them into the ``{"success": false, "message": ...}`` envelope so that no
handler has to build error responses itself.
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong!"

# body fields whose built-in pydantic errors are replaced by one friendly message
FIELD_MESSAGES = {
    "date": "Please provide a valid date",
    "email": "Please provide a valid email",
}


class FinanceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = GENERIC_ERROR_MESSAGE

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(FinanceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class AuthenticationError(FinanceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class NotFoundError(FinanceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(FinanceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class InternalError(FinanceError):
    pass


def error_body(message: str) -> Dict[str, Any]:
    return {"success": False, "message": message}


def first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return ValidationError.default_message
    err = errors[0]
    msg = str(err.get("msg", ValidationError.default_message))
    # messages raised from our own validators already name the field
    if msg.startswith("Value error, "):
        return msg[len("Value error, "):]
    loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
    if tuple(err.get("loc", ()))[:1] == ("body",) and loc and loc[-1] in FIELD_MESSAGES:
        return FIELD_MESSAGES[loc[-1]]
    if loc:
        return f"{'.'.join(loc)}: {msg}"
    return msg


async def finance_error_handler(request: Request, exc: FinanceError) -> JSONResponse:
    if isinstance(exc, InternalError):
        logger.error("Internal error on %s %s: %s", request.method, request.url.path, exc.message, exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content=error_body(GENERIC_ERROR_MESSAGE))
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(first_validation_message(exc)),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = "Route not found"
    else:
        message = str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content=error_body(message), headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(GENERIC_ERROR_MESSAGE),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FinanceError, finance_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
