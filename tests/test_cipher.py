"""Tests for wordchain.security.cipher: AES-256-GCM over hex."""

import hashlib

import pytest

from wordchain.security.cipher import (
    NONCE_SIZE,
    TAG_SIZE,
    AuthenticationFailed,
    Cipher,
    CryptoError,
    MalformedEncoding,
    decrypt,
    derive_key,
    encrypt,
)


class TestDeriveKey:
    def test_sha3_256_of_secret(self) -> None:
        assert derive_key("s3cret") == hashlib.sha3_256(b"s3cret").digest()
        assert len(derive_key("s3cret")) == 32


class TestRoundTrip:
    @pytest.mark.parametrize("plaintext", ["", "hello", "ünïcødé ✓", "x" * 5000])
    def test_decrypt_inverts_encrypt(self, plaintext: str) -> None:
        assert decrypt("s3cret", encrypt("s3cret", plaintext)) == plaintext

    def test_wire_layout(self) -> None:
        blob = Cipher("k").encrypt("abc")
        raw = bytes.fromhex(blob)
        assert blob == blob.lower()
        assert len(raw) == NONCE_SIZE + len("abc") + TAG_SIZE

    def test_fresh_nonce_per_call(self) -> None:
        cipher = Cipher("k")
        first, second = cipher.encrypt("same"), cipher.encrypt("same")
        assert first != second
        assert first[: NONCE_SIZE * 2] != second[: NONCE_SIZE * 2]


class TestFailures:
    def test_not_hex(self) -> None:
        with pytest.raises(MalformedEncoding):
            decrypt("k", "not-hex!")

    def test_shorter_than_nonce(self) -> None:
        with pytest.raises(MalformedEncoding):
            decrypt("k", "00" * (NONCE_SIZE - 1))

    def test_nonce_only(self) -> None:
        with pytest.raises(AuthenticationFailed):
            decrypt("k", "00" * NONCE_SIZE)

    def test_wrong_key(self) -> None:
        blob = encrypt("right", "payload")
        with pytest.raises(AuthenticationFailed):
            decrypt("wrong", blob)

    @pytest.mark.parametrize("position", [0, NONCE_SIZE, -1])
    def test_single_bit_flip_is_detected(self, position: int) -> None:
        raw = bytearray(bytes.fromhex(encrypt("k", "payload")))
        raw[position] ^= 0x01
        with pytest.raises(AuthenticationFailed):
            decrypt("k", raw.hex())

    def test_single_bit_flip_in_token_text_is_detected(self) -> None:
        blob = encrypt("k", "abc")
        for index, char in enumerate(blob):
            for bit in range(8):
                flipped = blob[:index] + chr(ord(char) ^ (1 << bit)) + blob[index + 1 :]
                with pytest.raises(CryptoError):
                    decrypt("k", flipped)

    def test_uppercase_hex_is_rejected(self) -> None:
        blob = encrypt("k", "payload")
        with pytest.raises(MalformedEncoding):
            decrypt("k", blob.upper())

    def test_odd_length(self) -> None:
        with pytest.raises(MalformedEncoding):
            decrypt("k", encrypt("k", "payload")[:-1])

    def test_errors_share_a_base(self) -> None:
        assert issubclass(MalformedEncoding, CryptoError)
        assert issubclass(AuthenticationFailed, CryptoError)

    def test_message_does_not_echo_input(self) -> None:
        with pytest.raises(CryptoError) as info:
            decrypt("k", "zz-secret-looking-input")
        assert "secret-looking" not in str(info.value)
