import hashlib
import hmac
import secrets


def random_secret(num_bytes: int = 48) -> str:
    """URL-safe secret drawn from the OS CSPRNG."""
    return secrets.token_urlsafe(num_bytes)


def fingerprint(secret: str) -> str:
    """SHA-256 hex digest stored in place of a raw secret."""
    return hashlib.sha256(secret.encode()).hexdigest()


def fingerprints_match(stored: str, presented: str) -> bool:
    return hmac.compare_digest(stored.encode(), presented.encode())
