"""
Authentication service.

Login flow: fetch user by email -> verify password -> sign access token
-> (optionally) issue and persist a refresh token. Any failure aborts the
whole login; nothing is retried here.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from models.refresh_token import RefreshToken
from services.settings import SecuritySettings
from utils.exceptions import InvalidCredentials, NotFound
from utils.security import (
    burn_password_check,
    check_password,
    create_access_token,
    decode_access_token,
    generate_refresh_token,
)

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AuthContext:
    """Authenticated caller, handed explicitly to request handlers."""
    user_id: str
    email: Optional[str] = None
    full_name: Optional[str] = None


@dataclass(frozen=True)
class LoginResult:
    token: str
    refresh_token: Optional[str] = None


class RefreshTokenIssuer:
    """Generates opaque refresh tokens and persists their lifecycle record."""

    def __init__(
        self,
        store,
        generate: Callable[[], str] = generate_refresh_token,
        clock: Callable[[], datetime] = _now,
    ):
        self.store = store
        self.generate = generate
        self.clock = clock

    def issue_and_persist(self, user_id: str, ttl_hours: int) -> RefreshToken:
        refresh_token = RefreshToken(
            id=str(uuid.uuid4()),
            token=self.generate(),
            expires_at=self.clock() + timedelta(hours=ttl_hours),
            is_used=False,
            is_revoked=False,
            user_id=user_id,
        )
        return self.store.create(refresh_token)


class AuthService:
    """Authentication service."""

    def __init__(
        self,
        users,
        refresh_tokens,
        settings: SecuritySettings,
        issuer: Optional[RefreshTokenIssuer] = None,
        clock: Callable[[], datetime] = _now,
    ):
        """
        Args:
            users: UserStore (or anything with get_by_email).
            refresh_tokens: RefreshTokenStore.
            settings: Secret key, TTLs and the refresh-token switch.
            issuer: Refresh token issuer; built from refresh_tokens if omitted.
            clock: Source of "now" for token expiry.
        """
        self.users = users
        self.refresh_tokens = refresh_tokens
        self.settings = settings
        self.issuer = issuer or RefreshTokenIssuer(refresh_tokens, clock=clock)
        self.clock = clock

    def login(self, email: str, password: str) -> LoginResult:
        """
        Authenticate by email and password.

        Raises:
            InvalidCredentials: unknown email or wrong password (same message).
            SigningError, RandomnessError, StoreError: propagated unchanged.
        """
        try:
            user = self.users.get_by_email(email)
        except NotFound:
            burn_password_check(password)
            logger.warning("login rejected: unknown email")
            raise InvalidCredentials() from None

        try:
            check_password(password, user.password_hash)
        except InvalidCredentials:
            logger.warning("login rejected: bad password for user %s", user.id)
            raise

        token = create_access_token(
            subject=user.id,
            email=user.email,
            display_name=user.full_name,
            ttl_minutes=self.settings.access_token_ttl_minutes,
            secret_key=self.settings.jwt_secret,
            now=self.clock(),
        )

        if not self.settings.refresh_tokens_enabled:
            logger.info("user %s logged in", user.id)
            return LoginResult(token=token)

        # the refresh token insert is the commit point of a login
        refresh_token = self.issuer.issue_and_persist(
            user.id, self.settings.refresh_token_ttl_hours
        )
        logger.info("user %s logged in, refresh token %s issued", user.id, refresh_token.id)
        return LoginResult(token=token, refresh_token=refresh_token.token)

    def authenticate(self, token: str) -> AuthContext:
        """Validate an access token and return the caller's context."""
        claims = decode_access_token(token, self.settings.jwt_secret)
        return AuthContext(
            user_id=str(claims["sub"]),
            email=claims.get("email"),
            full_name=claims.get("fullName"),
        )

    def revoke_refresh_token(self, ctx: AuthContext, token: str) -> RefreshToken:
        """Revoke one of the caller's refresh tokens (logout)."""
        refresh_token = self.refresh_tokens.get_by_token(token)
        if refresh_token.user_id != ctx.user_id:
            raise NotFound("Refresh token not found")
        if not refresh_token.is_revoked:
            refresh_token.is_revoked = True
            self.refresh_tokens.save(refresh_token)
            logger.info("refresh token %s revoked by user %s", refresh_token.id, ctx.user_id)
        return refresh_token
