"""Tests for security-critical functionality."""

from datetime import timedelta
from uuid import uuid4

import pytest
from pydantic import ValidationError

from src.scrum.core.security import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.scrum.schemas.auth import RegisterRequest

pytestmark = pytest.mark.unit


class TestPasswordHashing:
    def test_hash_and_verify(self):
        hashed = hash_password("correct-horse-battery-staple")
        assert hashed != "correct-horse-battery-staple"
        assert verify_password("correct-horse-battery-staple", hashed)

    def test_wrong_password(self):
        hashed = hash_password("correct-horse-battery-staple")
        assert not verify_password("purple-monkey-dishwasher", hashed)

    def test_garbage_hash_returns_false(self):
        assert not verify_password("anything", "not-an-argon2-hash")


class TestTokens:
    def test_access_token_round_trip(self):
        user_id = uuid4()
        payload = decode_token(create_access_token(user_id))
        assert payload is not None
        assert payload["sub"] == str(user_id)
        assert payload["type"] == ACCESS_TOKEN_TYPE

    def test_expired_token_rejected(self):
        token = create_access_token(uuid4(), expires_delta=timedelta(seconds=-1))
        assert decode_token(token) is None

    def test_tampered_token_rejected(self):
        token = create_access_token(uuid4())
        assert decode_token(token[:-2] + "xx") is None

    def test_refresh_tokens_are_unique(self):
        """Two refresh tokens minted back to back must hash differently."""
        user_id = uuid4()
        first, expires_at = create_refresh_token(user_id)
        second, _ = create_refresh_token(user_id)

        assert hash_token(first) != hash_token(second)
        assert expires_at.tzinfo is None
        assert decode_token(first)["type"] == REFRESH_TOKEN_TYPE


class TestPasswordValidation:
    """Tests for password strength validation using zxcvbn."""

    def test_strong_password_accepted(self):
        request = RegisterRequest(
            email="test@example.com",
            password="correct-horse-battery-staple",
            full_name="Test User",
        )
        assert request.password == "correct-horse-battery-staple"

    @pytest.mark.parametrize("password", ["password", "12345678", "qwertyuiop"])
    def test_weak_password_rejected(self, password: str):
        with pytest.raises(ValidationError, match="(?i)weak|too weak"):
            RegisterRequest(email="test@example.com", password=password, full_name="Test User")

    def test_blank_full_name_rejected(self):
        with pytest.raises(ValidationError):
            RegisterRequest(
                email="test@example.com",
                password="correct-horse-battery-staple",
                full_name="   ",
            )
