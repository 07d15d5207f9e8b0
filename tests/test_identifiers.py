import uuid

import pytest

from storefront_cart.domain.identifiers import (
    Owner,
    OwnerKind,
    get_identifier_type,
    is_user_id,
    is_valid_identifier,
    resolve_owner,
)


@pytest.mark.parametrize(
    "value",
    [
        "550e8400-e29b-41d4-a716-446655440000",
        "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
        "550E8400-E29B-41D4-A716-446655440000",
        str(uuid.uuid4()),
    ],
)
def test_uuid_is_user_id(value):
    assert is_user_id(value) is True


@pytest.mark.parametrize(
    "value",
    [
        "V1StGXR8_Z5jdHi6B-myT",
        "abc123xyz",
        "",
        None,
        123,
        {},
        "550e8400-e29b-41d4-a716-44665544000",
        "550e8400e29b41d4a716446655440000",
        "550e8400-e29b-41d4-a716-446655440000-extra",
        "550e8400 e29b 41d4 a716 446655440000",
    ],
)
def test_non_uuid_is_not_user_id(value):
    assert is_user_id(value) is False


def test_valid_identifier_rules():
    assert is_valid_identifier("550e8400-e29b-41d4-a716-446655440000")
    assert is_valid_identifier("abc123xyz")
    assert is_valid_identifier("abc_123-xyz_789")
    assert is_valid_identifier("  abc123xyz  ")
    assert not is_valid_identifier("abc123")
    assert not is_valid_identifier("   ")
    assert not is_valid_identifier("")
    assert not is_valid_identifier(None)
    assert not is_valid_identifier([])


def test_identifier_type():
    assert get_identifier_type("550e8400-e29b-41d4-a716-446655440000") == "user"
    assert get_identifier_type("V1StGXR8_Z5jdHi6B-myT") == "session"
    assert get_identifier_type("abc") == "invalid"
    assert get_identifier_type(None) == "invalid"


def test_resolve_owner_classifies_once():
    user_id = str(uuid.uuid4())
    assert resolve_owner(user_id) == Owner.user(user_id)
    assert resolve_owner("opaque-session-token").kind is OwnerKind.SESSION

    owner = Owner.session(user_id)
    # an explicit owner is never re-sniffed
    assert resolve_owner(owner) is owner
