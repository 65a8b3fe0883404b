"""
RefreshToken model: opaque refresh tokens issued at login.
Fields:
- token (64 lowercase hex chars, unique)
- user_id (String(36)) - FK to users.id, cascades on delete
- is_used / is_revoked flags
- expires_at
"""
from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from models.base_model import BaseModel, Base


class RefreshToken(BaseModel, Base):
    __tablename__ = "refresh_tokens"

    token = Column(String(128), nullable=False, unique=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    is_used = Column(Boolean, default=False, nullable=False)
    is_revoked = Column(Boolean, default=False, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User", back_populates="refresh_tokens")

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        # SQLite hands back naive datetimes; they were stored as UTC
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return now >= expires_at

    def is_valid(self, now: datetime | None = None) -> bool:
        """Valid iff not expired, not used and not revoked."""
        return not (self.is_used or self.is_revoked or self.is_expired(now))

    def __repr__(self):
        return f"<RefreshToken id={self.id} user_id={self.user_id}>"
