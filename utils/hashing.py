from passlib.context import CryptContext
from core.config import settings

bcrypt_context = CryptContext(
    schemes=['bcrypt'],
    deprecated='auto',
    bcrypt__rounds=settings.BCRYPT_ROUNDS
)

def get_password_hash(password: str) -> str:
    # Bcrypt has a 72-byte limit, truncate if necessary
    return bcrypt_context.hash(password[:72])


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # Bcrypt has a 72-byte limit, truncate if necessary
    try:
        return bcrypt_context.verify(plain_password[:72], hashed_password)
    except (ValueError, TypeError):
        # unrecognised or corrupted stored hash
        return False
