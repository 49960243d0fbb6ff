"""Tests for salted argon2id password hashing."""

import pytest

from wordchain.security.passwords import SALT_LENGTH, hash_password, new_salt, verify_password


class TestSalt:
    def test_alphanumeric_and_length(self) -> None:
        salt = new_salt()
        assert len(salt) == SALT_LENGTH
        assert salt.isalnum()
        assert salt.isascii()

    def test_unique(self) -> None:
        assert new_salt() != new_salt()


class TestHash:
    def test_deterministic_for_salt(self) -> None:
        salt = new_salt()
        assert hash_password("pw", salt) == hash_password("pw", salt)

    def test_salt_changes_hash(self) -> None:
        assert hash_password("pw", "a" * 32) != hash_password("pw", "b" * 32)

    def test_hex_output(self) -> None:
        digest = hash_password("pw", new_salt())
        assert len(digest) == 64
        int(digest, 16)

    def test_empty_password_rejected(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            hash_password("", new_salt())


class TestVerify:
    def test_match(self) -> None:
        salt = new_salt()
        assert verify_password("pw", salt, hash_password("pw", salt))

    def test_mismatch(self) -> None:
        salt = new_salt()
        assert not verify_password("nope", salt, hash_password("pw", salt))

    def test_empty_inputs(self) -> None:
        assert not verify_password("", "salt", "abcd")
        assert not verify_password("pw", "salt", "")
