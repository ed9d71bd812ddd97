"""Password hashing with bcrypt."""

from __future__ import annotations

import pytest

from core.errors import DomainError
from services.auth_service import hash_password, verify_password


def test_hash_and_verify() -> None:
    stored = hash_password("hunter22", rounds=4)
    assert stored.startswith("$2b$04$")
    assert "hunter22" not in stored
    assert verify_password("hunter22", stored) is True
    assert verify_password("hunter23", stored) is False


def test_salted() -> None:
    assert hash_password("same", rounds=4) != hash_password("same", rounds=4)


def test_verify_rejects_non_bcrypt_hash() -> None:
    assert verify_password("x", "plaintext") is False
    assert verify_password("x", "pbkdf2_sha256$1$aa$bb") is False


def test_password_over_72_bytes() -> None:
    with pytest.raises(DomainError):
        hash_password("a" * 73, rounds=4)
    assert verify_password("a" * 73, hash_password("a" * 72, rounds=4)) is False
