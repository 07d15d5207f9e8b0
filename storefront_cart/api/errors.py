# storefront_cart/api/errors.py
from typing import Tuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront_cart.domain.errors import CartError
from storefront_cart.domain.schemas import ErrorInfo, ErrorResponse
from storefront_cart.utils.logging import get_logger

logger = get_logger(__name__)


def format_error_response(error: Exception) -> Tuple[ErrorResponse, int]:
    """Map any exception to the error envelope and an HTTP status code."""
    if isinstance(error, CartError):
        body = ErrorResponse(
            message=error.message,
            error=ErrorInfo(type=error.type, details=error.metadata),
        )
        return body, error.status_code

    if isinstance(error, RequestValidationError):
        body = ErrorResponse(
            message="Invalid request",
            error=ErrorInfo(type="VALIDATION_ERROR", details=_jsonable_errors(error)),
        )
        return body, 400

    return ErrorResponse(message="Unexpected error", error=ErrorInfo(type="UNKNOWN_ERROR")), 500


def _jsonable_errors(error: RequestValidationError):
    return [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in error.errors()
    ]


def _respond(error: Exception) -> JSONResponse:
    body, status_code = format_error_response(error)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


async def _handle_cart_error(request: Request, exc: CartError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return _respond(exc)


async def _handle_request_validation(request: Request, exc: RequestValidationError):
    return _respond(exc)


async def _handle_unexpected(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _respond(exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CartError, _handle_cart_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected)
