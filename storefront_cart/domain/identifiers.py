# storefront_cart/domain/identifiers.py
"""
Cart owner identifiers.

Authenticated users are identified by UUIDs; anonymous sessions by opaque
tokens that are never UUID-shaped. The owner is classified once, at the
request boundary, and passed down as an `Owner`.
"""
import re
from enum import Enum

from pydantic import BaseModel, ConfigDict

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

MIN_SESSION_ID_LENGTH = 8


class OwnerKind(str, Enum):
    USER = "user"
    SESSION = "session"


class Owner(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: OwnerKind
    value: str

    @classmethod
    def user(cls, user_id: str) -> "Owner":
        return cls(kind=OwnerKind.USER, value=user_id)

    @classmethod
    def session(cls, session_id: str) -> "Owner":
        return cls(kind=OwnerKind.SESSION, value=session_id)

    @property
    def is_user(self) -> bool:
        return self.kind is OwnerKind.USER

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.value}"


def is_user_id(value) -> bool:
    return isinstance(value, str) and bool(_UUID_RE.match(value))


def is_valid_identifier(value) -> bool:
    if not isinstance(value, str):
        return False
    if is_user_id(value):
        return True
    return len(value.strip()) >= MIN_SESSION_ID_LENGTH


def get_identifier_type(value) -> str:
    if not is_valid_identifier(value):
        return "invalid"
    return OwnerKind.USER.value if is_user_id(value) else OwnerKind.SESSION.value


def resolve_owner(identifier: "Owner | str") -> Owner:
    if isinstance(identifier, Owner):
        return identifier
    if is_user_id(identifier):
        return Owner.user(identifier)
    return Owner.session(identifier)
