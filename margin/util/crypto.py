"""Hashing helpers for the page password challenge-response flow.

The client never sends its password. It computes
``local = sha256_hex(salt + password)`` and answers a challenge with
``sha256_hex(challenge + local)``. The server stores only ``local``.
"""

import hmac
import secrets
from hashlib import sha256


def sha256_hex(value: str) -> str:
    """Hex SHA-256 digest of a UTF-8 string."""
    return sha256(value.encode("utf-8")).hexdigest()


def generate_salt() -> str:
    """16 random bytes, hex encoded."""
    return secrets.token_hex(16)


def generate_challenge() -> str:
    """32 random bytes, hex encoded."""
    return secrets.token_hex(32)


def hash_password(salt: str, password: str) -> str:
    """Salted password hash stored for a protected page."""
    return sha256_hex(salt + password)


def challenge_response(challenge: str, password_hash: str) -> str:
    """Hash a client must send to answer a challenge."""
    return sha256_hex(challenge + password_hash)


def hex_digests_match(received: str, expected: str) -> bool:
    """Constant-time comparison of two hex digests.

    Malformed hex never matches.
    """
    try:
        received_bytes = bytes.fromhex(received)
        expected_bytes = bytes.fromhex(expected)
    except ValueError:
        return False
    return hmac.compare_digest(received_bytes, expected_bytes)
