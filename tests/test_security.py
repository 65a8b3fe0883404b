"""Unit tests for password hashing, access tokens and refresh token generation."""

import re
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from utils import security
from utils.exceptions import (
    HashingError,
    InvalidCredentials,
    RandomnessError,
    SigningError,
    Unauthorized,
)
from utils.security import (
    check_password,
    create_access_token,
    decode_access_token,
    generate_refresh_token,
    hash_password,
    verify_password,
)

SECRET = "k1-secret"


class TestPasswordHashing:
    """Test password hashing functions."""

    def test_hash_is_argon2_and_not_plaintext(self):
        hashed = hash_password("secret1")

        assert hashed != "secret1"
        assert hashed.startswith("$argon2")

    def test_same_password_different_hashes(self):
        hash1 = hash_password("secret1")
        hash2 = hash_password("secret1")

        assert hash1 != hash2
        assert verify_password("secret1", hash1) is True
        assert verify_password("secret1", hash2) is True

    @pytest.mark.parametrize("password", ["secret1", "p@ssw0rd!", "üñíçødé pass", " " * 6])
    def test_verify_roundtrip(self, password):
        assert verify_password(password, hash_password(password)) is True

    def test_verify_wrong_password(self):
        hashed = hash_password("secret1")

        assert verify_password("secret2", hashed) is False
        assert verify_password("", hashed) is False

    def test_verify_malformed_hash(self):
        assert verify_password("secret1", "not-a-hash") is False

    def test_check_password_raises_invalid_credentials(self):
        hashed = hash_password("secret1")

        assert check_password("secret1", hashed) is True
        with pytest.raises(InvalidCredentials):
            check_password("nope-nope", hashed)

    def test_hashing_failure_is_wrapped(self, monkeypatch):
        from argon2.exceptions import HashingError as Argon2HashingError

        class BrokenHasher:
            def hash(self, password):
                raise Argon2HashingError("boom")

        monkeypatch.setattr(security, "ph", BrokenHasher())
        with pytest.raises(HashingError):
            hash_password("secret1")


class TestAccessTokens:
    """Test access token signing and validation."""

    def test_token_has_three_segments_and_claims(self):
        now = datetime.now(timezone.utc)
        token = create_access_token("user-1", "a@b.com", "A B", 15, SECRET, now=now)

        assert len(token.split(".")) == 3
        claims = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert claims["sub"] == "user-1"
        assert claims["email"] == "a@b.com"
        assert claims["fullName"] == "A B"
        assert claims["exp"] == int(now.timestamp()) + 15 * 60

    def test_exp_matches_issue_time_without_explicit_now(self):
        before = datetime.now(timezone.utc).timestamp()
        token = create_access_token("user-1", "a@b.com", "A B", 30, SECRET)

        claims = decode_access_token(token, SECRET)
        assert abs(claims["exp"] - (before + 30 * 60)) <= 1

    def test_exp_increases_with_issue_time(self):
        now = datetime.now(timezone.utc)
        first = create_access_token("user-1", "a@b.com", "A B", 15, SECRET, now=now)
        later = create_access_token(
            "user-1", "a@b.com", "A B", 15, SECRET, now=now + timedelta(seconds=5)
        )

        assert first.split(".")[2] != later.split(".")[2]
        assert (
            jwt.decode(later, SECRET, algorithms=["HS256"])["exp"]
            > jwt.decode(first, SECRET, algorithms=["HS256"])["exp"]
        )

    def test_wrong_key_rejected(self):
        token = create_access_token("user-1", "a@b.com", "A B", 15, SECRET)

        with pytest.raises(Unauthorized):
            decode_access_token(token, "k2-secret")

    def test_expired_token_rejected(self):
        issued = datetime.now(timezone.utc) - timedelta(hours=1)
        token = create_access_token("user-1", "a@b.com", "A B", 15, SECRET, now=issued)

        with pytest.raises(Unauthorized, match="expired"):
            decode_access_token(token, SECRET)

    def test_tampered_token_rejected(self):
        token = create_access_token("user-1", "a@b.com", "A B", 15, SECRET)
        header, claims, signature = token.split(".")
        forged = ".".join([header, claims, signature[::-1]])

        with pytest.raises(Unauthorized) as exc:
            decode_access_token(forged, SECRET)
        assert str(exc.value) == "Invalid token"

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_token_rejected(self, token):
        with pytest.raises(Unauthorized):
            decode_access_token(token, SECRET)

    def test_token_without_subject_rejected(self):
        token = jwt.encode({"exp": 9999999999}, SECRET, algorithm="HS256")

        with pytest.raises(Unauthorized):
            decode_access_token(token, SECRET)

    def test_empty_secret_refused(self):
        with pytest.raises(SigningError):
            create_access_token("user-1", "a@b.com", "A B", 15, "")


class TestRefreshTokenGeneration:
    """Test opaque refresh token generation."""

    def test_format(self):
        token = generate_refresh_token()

        assert re.fullmatch(r"[0-9a-f]{64}", token)

    def test_no_collisions(self):
        tokens = {generate_refresh_token() for _ in range(10_000)}

        assert len(tokens) == 10_000

    def test_rng_failure_is_fatal(self, monkeypatch):
        def broken(nbytes):
            raise NotImplementedError("no entropy source")

        monkeypatch.setattr(security.secrets, "token_hex", broken)
        with pytest.raises(RandomnessError):
            generate_refresh_token()
