import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exceptions import BaseCustomException
from core.logging.providers import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


def error_response(status_code: int, message: str, errors: list[dict] | None = None) -> JSONResponse:
    content = {"status": "error", "message": message}
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation errors.

    Missing or malformed query parameters and body fields are client
    input errors and are reported as 400. The first failing field is
    repeated in `message`.

    Parameters
    ----------
    request : Request
        FastAPI request
    exc : RequestValidationError
        Validation error

    Returns
    -------
    JSONResponse
        Error response with one entry per failing field
    """
    errors = [
        {
            "field": ".".join(
                str(part) for part in error["loc"]
                if not isinstance(part, int) and part not in ("body", "query")
            ) or "body",
            "message": error["msg"],
            "type": error["type"]
        }
        for error in exc.errors()
    ]

    message = f"{errors[0]['field']}: {errors[0]['message']}" if errors else "Validation error"
    return error_response(400, message, errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handler for routing errors such as unknown paths and wrong methods."""
    return error_response(exc.status_code, str(exc.detail))


async def custom_exception_handler(request: Request, exc: Exception):
    """
    Handler for domain and unexpected exceptions.

    Downstream failures keep their original message so the caller sees
    what the node or the contract reported.

    Parameters
    ----------
    request : Request
        FastAPI request
    exc : Exception
        Raised exception

    Returns
    -------
    JSONResponse
        Error response
    """
    if isinstance(exc, BaseCustomException):
        status_code, message = exc.get_status_code(), exc.message
    else:
        status_code, message = 500, str(exc) or exc.__class__.__name__

    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {message}", exc_info=exc)

    return error_response(status_code, message)
