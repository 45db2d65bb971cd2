from core.database import Base
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from models.mixins import UUIDPrimaryKeyMixin, CreatedAtMixin, UpdatedAtMixin

class User(Base, UUIDPrimaryKeyMixin, CreatedAtMixin, UpdatedAtMixin):
    __tablename__ = "users"

    #relationships
    sessions = relationship("UserSession", back_populates="user", passive_deletes=True)

    # stored lowercase
    email = Column(String(320), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    display_name = Column(String(120), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_email_verified = Column(Boolean, default=False, nullable=False)
    last_login_at = Column(DateTime(timezone=True), nullable=True)
