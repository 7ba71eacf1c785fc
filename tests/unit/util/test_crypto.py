"""Unit tests for challenge-response hashing helpers."""

from hashlib import sha256

from margin.util.crypto import (
    challenge_response,
    generate_challenge,
    generate_salt,
    hash_password,
    hex_digests_match,
)


class TestCrypto:
    """Tests for hashing helpers."""

    def test_password_hash_is_sha256_of_salt_then_password(self):
        assert hash_password("salt", "pw") == sha256(b"saltpw").hexdigest()

    def test_challenge_response_is_sha256_of_challenge_then_hash(self):
        stored = hash_password("salt", "pw")

        expected = sha256(("challenge" + stored).encode()).hexdigest()
        assert challenge_response("challenge", stored) == expected

    def test_random_values_have_expected_length(self):
        assert len(generate_salt()) == 32
        assert len(generate_challenge()) == 64
        assert generate_challenge() != generate_challenge()

    def test_digest_comparison(self):
        digest = hash_password("salt", "pw")

        assert hex_digests_match(digest, digest)
        assert hex_digests_match(digest.upper(), digest)
        assert not hex_digests_match(hash_password("salt", "other"), digest)
        assert not hex_digests_match("zz", digest)
        assert not hex_digests_match("", digest)
