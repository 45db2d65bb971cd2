from datetime import datetime, timezone, timedelta
from typing import Optional
from jose import jwt, JWTError
from core.config import Settings
from core.exceptions import UnauthorizedError


class AccessTokenSigner:
    """
    Issues and verifies short-lived JWT access tokens.

    Access tokens are stateless: nothing about them is stored. Refresh
    tokens are not JWTs and are handled by AuthService.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 15):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AccessTokenSigner":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    def issue(self, user_id: str, expires_delta: Optional[timedelta] = None) -> str:
        """
        Creates a JWT access token.

        Args:
            user_id: Subject of the token
            expires_delta: Lifetime override (default: ACCESS_TOKEN_EXPIRE_MINUTES)

        Returns:
            Encoded JWT string
        """
        if expires_delta is None:
            expires_delta = self.expires_delta

        now = datetime.now(timezone.utc)

        payload = {
            "sub": user_id,
            "type": "access",
            "iat": now,
            "exp": now + expires_delta
        }

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict:
        """
        Decodes an access token and returns its claims.

        Raises:
            UnauthorizedError: bad signature, expired, wrong type or no subject
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise UnauthorizedError("Could not validate credentials.")

        if payload.get("type") != "access":
            raise UnauthorizedError("Invalid token type. Access token required.")

        if not payload.get("sub"):
            raise UnauthorizedError("Could not validate credentials.")

        return payload
