# storefront_cart/api/deps.py
import secrets
from typing import Optional

from fastapi import Depends, Header, Request, Response

from storefront_cart.domain.errors import AuthorizationError
from storefront_cart.domain.identifiers import Owner, OwnerKind, get_identifier_type, is_user_id
from storefront_cart.utils.settings import (
    SESSION_COOKIE_MAX_AGE,
    SESSION_COOKIE_NAME,
    SESSION_COOKIE_SECURE,
)


def new_session_id() -> str:
    # url-safe token, never UUID-shaped, so it cannot pass for a user id
    return secrets.token_urlsafe(16)


def get_user_id(x_user_id: Optional[str] = Header(None)) -> Optional[str]:
    """
    User id forwarded by the auth layer in X-User-Id.
    Returns None for anonymous requests.
    """
    if not x_user_id:
        return None
    if not is_user_id(x_user_id):
        raise AuthorizationError("Invalid user identifier")
    return x_user_id


def read_session_cookie(request: Request) -> Optional[str]:
    """
    Session id from the cookie, or None.
    Legacy UUID-format cookies are ignored so they are never read as user ids,
    and so are values too short to be a session token.
    """
    value = request.cookies.get(SESSION_COOKIE_NAME)
    if get_identifier_type(value) == OwnerKind.SESSION.value:
        return value
    return None


def get_session_id(session_id: Optional[str] = Depends(read_session_cookie)) -> str:
    return session_id or new_session_id()


def get_owner(
    user_id: Optional[str] = Depends(get_user_id),
    session_id: str = Depends(get_session_id),
) -> Owner:
    if user_id:
        return Owner.user(user_id)
    return Owner.session(session_id)


def set_session_cookie(response: Response, session_id: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session_id,
        max_age=SESSION_COOKIE_MAX_AGE,
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
