"""
Unit Tests for Security Module
Tests for: password hashing, temporary passwords, JWT tokens
"""
import pytest
from datetime import timedelta
from jose import jwt
from fastapi import HTTPException

from app.core.security import (
    verify_password,
    get_password_hash,
    generate_temporary_password,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from app.core.config import settings


class TestPasswordHashing:
    """Test password hashing functions"""

    def test_hash_password_returns_different_value(self):
        password = "testpassword123"
        hashed = get_password_hash(password)

        assert hashed != password
        assert hashed.startswith("$2")

    def test_hash_password_different_each_time(self):
        """Bcrypt salts every hash"""
        assert get_password_hash("testpassword123") != get_password_hash("testpassword123")

    def test_verify_password_correct(self):
        hashed = get_password_hash("testpassword123")

        assert verify_password("testpassword123", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = get_password_hash("testpassword123")

        assert verify_password("wrongpassword", hashed) is False

    def test_verify_password_empty_hash(self):
        assert verify_password("anything", "") is False

    def test_hash_long_password_truncated(self):
        """Bcrypt only looks at the first 72 bytes"""
        hashed = get_password_hash("a" * 100)

        assert verify_password("a" * 72, hashed) is True


class TestTemporaryPassword:

    def test_default_length_is_eight(self):
        assert len(generate_temporary_password()) == 8

    def test_only_lowercase_and_digits(self):
        password = generate_temporary_password(64)

        assert password.isalnum()
        assert password == password.lower()

    def test_passwords_differ(self):
        assert generate_temporary_password(16) != generate_temporary_password(16)


class TestJWTTokens:
    """Test JWT token functions"""

    def test_access_token_contains_claims(self):
        token = create_access_token({"sub": "user-id", "email": "a@example.com"})

        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])

        assert payload["sub"] == "user-id"
        assert payload["type"] == "access"
        assert "exp" in payload

    def test_refresh_token_type(self):
        payload = decode_token(create_refresh_token({"sub": "user-id"}))

        assert payload["type"] == "refresh"

    def test_expired_token_rejected(self):
        token = create_access_token({"sub": "user-id"}, expires_delta=timedelta(seconds=-1))

        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)

        assert exc_info.value.status_code == 401

    def test_tampered_token_rejected(self):
        token = create_access_token({"sub": "user-id"})

        with pytest.raises(HTTPException):
            decode_token(token[:-4] + "abcd")

    def test_token_signed_with_other_key_rejected(self):
        token = jwt.encode({"sub": "user-id", "type": "access"}, "other-key", algorithm="HS256")

        with pytest.raises(HTTPException):
            decode_token(token)
