from datetime import datetime, timezone, timedelta
from typing import Optional
from sqlalchemy.exc import IntegrityError
from core.config import Settings
from core.exceptions import ConflictError, UnauthorizedError, NotFoundError
from models.users import User
from services.session_store import SessionStore
from services.token_service import AccessTokenSigner
from utils.crypto import random_secret, fingerprint, fingerprints_match
from utils.hashing import get_password_hash, verify_password
from utils.refresh_tokens import format_refresh_token, parse_refresh_token

EMAIL_TAKEN = "Email already registered"
INVALID_CREDENTIALS = "Invalid credentials"
INVALID_REFRESH_TOKEN = "Invalid refresh token"
USER_NOT_FOUND = "User not found"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AuthService:
    """
    Session lifecycle: registration, login, refresh rotation and logout.

    Every successful register/login creates a new session and returns an
    access token plus a refresh token of the form "<session_id>.<secret>".
    Each refresh replaces the session's secret, so a refresh token works
    exactly once. Failures are raised as AuthError subclasses; the caller
    decides how to present them.
    """

    def __init__(self, store: SessionStore, signer: AccessTokenSigner, settings: Settings):
        self.store = store
        self.signer = signer
        self.refresh_ttl = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
        self.refresh_token_bytes = settings.REFRESH_TOKEN_BYTES

    def register(self, email: str, password: str, display_name: Optional[str] = None) -> dict:
        """
        Creates a user and their first session.

        Flow:
        1. Reject an email that is already registered
        2. Hash the password
        3. Create the user and a session in one transaction
        4. Return access + refresh tokens
        """
        email = normalize_email(email)

        if self.store.find_user_by_email(email) is not None:
            raise ConflictError(EMAIL_TAKEN)

        hashed_password = get_password_hash(password)

        try:
            with self.store.atomic():
                user = self.store.create_user(
                    email=email,
                    hashed_password=hashed_password,
                    display_name=display_name
                )
                user_id = user.id
                refresh_token = self._mint_session(user_id)
        except IntegrityError:
            # a concurrent registration won the unique index
            raise ConflictError(EMAIL_TAKEN)

        return self._token_pair(user_id, refresh_token)

    def login(
        self,
        email: str,
        password: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None
    ) -> dict:
        """
        Authenticates a user and opens a new session.

        Unknown email, inactive account and wrong password all raise the
        same UnauthorizedError so callers cannot tell them apart.
        """
        user = self.store.find_user_by_email(normalize_email(email))

        if user is None or not user.is_active:
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not verify_password(password, user.hashed_password):
            raise UnauthorizedError(INVALID_CREDENTIALS)

        user_id = user.id
        with self.store.atomic():
            self.store.update_user_last_login(user_id, datetime.now(timezone.utc))
            refresh_token = self._mint_session(user_id, user_agent=user_agent, ip_address=ip_address)

        return self._token_pair(user_id, refresh_token)

    def refresh(self, refresh_token: str) -> dict:
        """
        Exchanges a refresh token for a new token pair, rotating the secret.

        The session keeps its id; only its fingerprint and expiry change.
        Malformed, unknown, revoked, expired and mismatched tokens all raise
        the same UnauthorizedError, as does losing a race against another
        refresh or a logout of the same session.
        """
        parsed = parse_refresh_token(refresh_token)
        if parsed is None:
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        session_id, raw_secret = parsed
        presented_hash = fingerprint(raw_secret)
        now = datetime.now(timezone.utc)

        session = self.store.find_session_by_id(session_id)
        if (
            session is None
            or session.revoked_at is not None
            or _as_utc(session.expires_at) <= now
            or not fingerprints_match(session.refresh_hash, presented_hash)
        ):
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        user_id = session.user_id
        new_secret = random_secret(self.refresh_token_bytes)

        with self.store.atomic():
            rotated = self.store.rotate_session(
                session_id,
                old_hash=presented_hash,
                new_hash=fingerprint(new_secret),
                expires_at=now + self.refresh_ttl
            )

        if not rotated:
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        return self._token_pair(user_id, format_refresh_token(session_id, new_secret))

    def logout(self, refresh_token: str) -> None:
        """
        Revokes the session behind a refresh token.

        Never raises for bad tokens: malformed, unknown and already revoked
        tokens are silently ignored, so the result reveals nothing.
        """
        parsed = parse_refresh_token(refresh_token)
        if parsed is None:
            return

        session_id, _ = parsed
        with self.store.atomic():
            self.store.revoke_session(session_id)

    def get_profile(self, user_id: str) -> User:
        user = self.store.find_user_by_id(user_id)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND)
        return user

    def update_profile(self, user_id: str, display_name: Optional[str]) -> User:
        with self.store.atomic():
            user = self.store.update_user_profile(user_id, display_name)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND)
        return user

    def _mint_session(
        self,
        user_id: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None
    ) -> str:
        raw_secret = random_secret(self.refresh_token_bytes)
        session = self.store.create_session(
            user_id=user_id,
            refresh_hash=fingerprint(raw_secret),
            expires_at=datetime.now(timezone.utc) + self.refresh_ttl,
            user_agent=user_agent,
            ip_address=ip_address
        )
        return format_refresh_token(session.id, raw_secret)

    def _token_pair(self, user_id: str, refresh_token: str) -> dict:
        return {
            "access_token": self.signer.issue(user_id),
            "refresh_token": refresh_token,
            "token_type": "bearer"
        }
