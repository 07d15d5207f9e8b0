# storefront_cart/domain/errors.py
from typing import Any, Dict


class CartError(Exception):
    """Base for errors the caller can act on; `type` is the wire code."""

    type = "CART_ERROR"
    status_code = 500

    def __init__(self, message: str, metadata: Dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.metadata = metadata


class ValidationError(CartError):
    type = "VALIDATION_ERROR"
    status_code = 400


class AuthorizationError(CartError):
    type = "AUTHORIZATION_ERROR"
    status_code = 403


class NotFoundError(CartError):
    type = "NOT_FOUND_ERROR"
    status_code = 404


class DatabaseError(CartError):
    type = "DATABASE_ERROR"
    status_code = 500
