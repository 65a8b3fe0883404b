"""Read-only security settings shared by every request."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class SecuritySettings:
    jwt_secret: str
    access_token_ttl_minutes: int = 15
    refresh_token_ttl_hours: int = 168
    refresh_tokens_enabled: bool = True

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "SecuritySettings":
        """
        Snapshot the security keys of a Flask config mapping.
        An empty JWT_SECRET is refused unless TESTING is set.
        """
        secret = config.get("JWT_SECRET") or ""
        if not secret and not config.get("TESTING"):
            raise RuntimeError("JWT_SECRET must be set outside of testing")
        return cls(
            jwt_secret=secret,
            access_token_ttl_minutes=int(config.get("ACCESS_TOKEN_TTL_MINUTES", 15)),
            refresh_token_ttl_hours=int(config.get("REFRESH_TOKEN_TTL_HOURS", 168)),
            refresh_tokens_enabled=bool(config.get("REFRESH_TOKENS_ENABLED", True)),
        )
