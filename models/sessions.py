from core.database import Base
from sqlalchemy import Column, DateTime, String, ForeignKey
from sqlalchemy.orm import relationship
from models.mixins import UUIDPrimaryKeyMixin, CreatedAtMixin, UpdatedAtMixin

class UserSession(Base, UUIDPrimaryKeyMixin, CreatedAtMixin, UpdatedAtMixin):
    """
    One login (or registration) of a user.

    The id is the public session reference embedded in refresh tokens. Only
    the SHA-256 fingerprint of the current refresh secret is stored; every
    refresh replaces it together with expires_at. A session is usable while
    revoked_at is NULL and expires_at is in the future.
    """
    __tablename__ = "user_sessions"

    #fk
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    #relationships
    user = relationship("User", back_populates="sessions")

    refresh_hash = Column(String(64), nullable=False, unique=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)

    # client details captured at login
    user_agent = Column(String(512), nullable=True)
    ip_address = Column(String(64), nullable=True)
