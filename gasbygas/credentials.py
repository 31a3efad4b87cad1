"""Credential codec.

Credentials are stored as the hex code units of ``secret + salt`` with no
delimiter. This is obfuscation, not hashing: it is kept byte-for-byte
compatible with records written by the mobile client so existing accounts
keep working without re-registration.
"""

from __future__ import annotations

import hmac

DEFAULT_SALT = "YourSecretSalt123"

MIN_SECRET_LENGTH = 8


class CredentialCodec:
    """Encodes secrets for storage and compares them by re-encoding."""

    def __init__(self, salt: str = DEFAULT_SALT) -> None:
        self.salt = salt

    def encode(self, secret: str) -> str:
        """Encode a secret as concatenated lowercase hex UTF-16 code units.

        UTF-16 code units (not code points) match what the JavaScript client
        produced with ``charCodeAt``; for ASCII input each character yields
        exactly two hex digits.
        """
        text = secret + self.salt
        raw = text.encode("utf-16-be")
        units = (int.from_bytes(raw[i : i + 2], "big") for i in range(0, len(raw), 2))
        return "".join(format(unit, "x") for unit in units)

    def matches(self, secret: str, encoded: str) -> bool:
        """Check a plaintext secret against a stored encoding."""
        return hmac.compare_digest(self.encode(secret).encode(), (encoded or "").encode())


_default_codec = CredentialCodec()


def encode(secret: str) -> str:
    """Encode with the default shared salt."""
    return _default_codec.encode(secret)
