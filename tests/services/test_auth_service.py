"""Tests for registration and credential verification."""
from typing import Any

import pytest

from app.core.errors import Conflict, Unauthenticated, ValidationError
from app.repositories import user_repo
from app.services import auth_service


def test__register__stores_only_password_hash(db: Any) -> None:
    user = auth_service.register(full_name="Ana", email="Ana@Mail.com", password="hunter22")

    stored = db["user"].find_one({"_id": user["_id"]})
    assert stored["email"] == "ana@mail.com"
    assert stored["password_hash"] != "hunter22"
    assert stored["password_hash"].startswith("$argon2id$")
    assert "password" not in stored


def test__register__duplicate_email_is_conflict_and_first_user_unchanged(db: Any) -> None:
    first = auth_service.register(full_name="Ana", email="ana@mail.com", password="hunter22")

    with pytest.raises(Conflict):
        auth_service.register(full_name="Impostor", email="ANA@mail.com", password="other-pass")

    assert db["user"].count_documents({}) == 1
    stored = db["user"].find_one({"_id": first["_id"]})
    assert stored["full_name"] == "Ana"
    assert auth_service.verify_password("hunter22", stored["password_hash"])


@pytest.mark.parametrize(
    ("full_name", "email", "password"),
    [
        ("", "ana@mail.com", "hunter22"),
        ("   ", "ana@mail.com", "hunter22"),
        ("Ana", "", "hunter22"),
        ("Ana", "not-an-email", "hunter22"),
        ("Ana", "ana@mail.com", ""),
        ("Ana", "ana@mail.com", "123"),
    ],
)
def test__register__rejects_invalid_fields(db: Any, full_name: str, email: str, password: str) -> None:
    with pytest.raises(ValidationError):
        auth_service.register(full_name=full_name, email=email, password=password)

    assert db["user"].count_documents({}) == 0


def test__verify_credentials__returns_user_on_match(db: Any) -> None:
    auth_service.register(full_name="Ana", email="ana@mail.com", password="hunter22")

    user = auth_service.verify_credentials(email=" ANA@mail.com ", password="hunter22")

    assert user["full_name"] == "Ana"


def test__verify_credentials__unknown_email_and_wrong_password_look_the_same(db: Any) -> None:
    auth_service.register(full_name="Ana", email="ana@mail.com", password="hunter22")

    with pytest.raises(Unauthenticated) as wrong_password:
        auth_service.verify_credentials(email="ana@mail.com", password="nope-nope")
    with pytest.raises(Unauthenticated) as unknown_user:
        auth_service.verify_credentials(email="bob@mail.com", password="hunter22")

    assert wrong_password.value.message == unknown_user.value.message == "Invalid credentials"


def test__verify_credentials__never_compares_plaintext(db: Any) -> None:
    """A stored value equal to the submitted password is not accepted as a hash."""
    user_repo.insert_user(full_name="Legacy", email="legacy@mail.com", password_hash="plaintext")

    with pytest.raises(Unauthenticated):
        auth_service.verify_credentials(email="legacy@mail.com", password="plaintext")
