"""Tests for the credential codec."""

from __future__ import annotations

from gasbygas.credentials import DEFAULT_SALT, CredentialCodec, encode

SALT_HEX = "596f757253656372657453616c74313233"


class TestCredentialCodec:
    def test_known_encoding(self):
        assert encode("a") == "61" + SALT_HEX

    def test_deterministic(self):
        codec = CredentialCodec()
        assert codec.encode("longenough1") == codec.encode("longenough1")

    def test_ascii_length_is_two_digits_per_character(self):
        secret = "password123"
        assert len(encode(secret)) == 2 * (len(secret) + len(DEFAULT_SALT))

    def test_lowercase_hex_without_padding(self):
        codec = CredentialCodec(salt="")
        assert codec.encode("\n") == "a"
        assert codec.encode("é") == "e9"

    def test_supplementary_characters_use_utf16_code_units(self):
        codec = CredentialCodec(salt="")
        assert codec.encode("\U0001f600") == "d83dde00"

    def test_different_salt_changes_encoding(self):
        assert CredentialCodec(salt="other").encode("secret12") != encode("secret12")

    def test_matches(self):
        codec = CredentialCodec()
        stored = codec.encode("longenough1")
        assert codec.matches("longenough1", stored) is True
        assert codec.matches("longenough2", stored) is False

    def test_matches_handles_empty_and_non_ascii_stored_values(self):
        codec = CredentialCodec()
        assert codec.matches("longenough1", "") is False
        assert codec.matches("longenough1", "ünïcode") is False
