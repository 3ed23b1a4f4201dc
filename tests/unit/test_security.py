"""
Unit tests for user_backend.core.security
"""
import pytest
from user_backend.core.security import (
    hash_password,
    verify_password,
)

pytestmark = pytest.mark.unit


class TestHashPassword:
    """Tests for hash_password"""

    def test_returns_non_empty_string(self):
        result = hash_password("mypassword")
        assert isinstance(result, str)
        assert len(result) > 0

    def test_different_salts_per_call(self):
        """Each hash should use a new salt, so hashes differ."""
        h1 = hash_password("same")
        h2 = hash_password("same")
        assert h1 != h2

    def test_hash_not_equal_to_plain(self):
        result = hash_password("secret123")
        assert result != "secret123"


class TestVerifyPassword:
    """Tests for verify_password"""

    def test_matching_password_returns_true(self):
        hashed = hash_password("correct")
        assert verify_password("correct", hashed) is True

    def test_wrong_password_returns_false(self):
        hashed = hash_password("correct")
        assert verify_password("wrong", hashed) is False

    def test_malformed_hash_returns_false(self):
        assert verify_password("Valid@123", "not-a-bcrypt-hash") is False

    def test_non_string_input_returns_false(self):
        hashed = hash_password("12345678")
        assert verify_password(12345678, hashed) is False


class TestLongPasswords:
    """bcrypt reads at most 72 bytes; longer passwords must not raise"""

    def test_long_password_hashes_and_verifies(self):
        password = "Aa@" + "x" * 80
        hashed = hash_password(password)
        assert verify_password(password, hashed) is True

    def test_only_first_72_bytes_count(self):
        hashed = hash_password("A" * 72 + "first")
        assert verify_password("A" * 72 + "second", hashed) is True
        assert verify_password("A" * 71, hashed) is False
