from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional
from sqlalchemy.orm import Session
from models.users import User
from models.sessions import UserSession


class SessionStore:
    """
    Persistence for users and their sessions over one SQLAlchemy session.

    Write methods only flush. Callers group writes with ``atomic()``, which
    commits them together or rolls all of them back.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    # users

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).one_or_none()

    def find_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.get(User, user_id)

    def create_user(self, email: str, hashed_password: str, display_name: Optional[str] = None) -> User:
        user = User(
            email=email,
            hashed_password=hashed_password,
            display_name=display_name
        )
        self.db.add(user)
        self.db.flush()
        return user

    def update_user_last_login(self, user_id: str, when: datetime) -> None:
        self.db.query(User).filter(User.id == user_id).update(
            {"last_login_at": when}, synchronize_session=False
        )

    def update_user_profile(self, user_id: str, display_name: Optional[str]) -> Optional[User]:
        user = self.find_user_by_id(user_id)
        if user is None:
            return None
        user.display_name = display_name
        self.db.flush()
        return user

    # sessions

    def create_session(
        self,
        user_id: str,
        refresh_hash: str,
        expires_at: datetime,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None
    ) -> UserSession:
        session = UserSession(
            user_id=user_id,
            refresh_hash=refresh_hash,
            expires_at=expires_at,
            user_agent=user_agent,
            ip_address=ip_address
        )
        self.db.add(session)
        self.db.flush()
        return session

    def find_session_by_id(self, session_id: str) -> Optional[UserSession]:
        return self.db.get(UserSession, session_id)

    def rotate_session(self, session_id: str, old_hash: str, new_hash: str, expires_at: datetime) -> bool:
        """
        Swap in a new refresh fingerprint and expiry, but only while the row
        still holds old_hash and is not revoked. False means another caller
        rotated or revoked the session first.
        """
        updated = self.db.query(UserSession).filter(
            UserSession.id == session_id,
            UserSession.refresh_hash == old_hash,
            UserSession.revoked_at.is_(None)
        ).update(
            {"refresh_hash": new_hash, "expires_at": expires_at},
            synchronize_session=False
        )
        return updated == 1

    def revoke_session(self, session_id: str) -> bool:
        """Revoke a session unless it is already revoked (or missing)."""
        updated = self.db.query(UserSession).filter(
            UserSession.id == session_id,
            UserSession.revoked_at.is_(None)
        ).update(
            {"revoked_at": datetime.now(timezone.utc)},
            synchronize_session=False
        )
        return updated == 1
