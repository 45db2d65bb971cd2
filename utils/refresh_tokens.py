"""
Refresh token wire format: "<session_id>.<raw_secret>".

The session id lets the service load the session row directly and then
compare fingerprints, instead of searching sessions by hash. Only the first
"." is a delimiter; the secret is URL-safe base64 and never contains one.
"""

from typing import Optional, Tuple

DELIMITER = "."


def format_refresh_token(session_id: str, raw_secret: str) -> str:
    return f"{session_id}{DELIMITER}{raw_secret}"


def parse_refresh_token(token: str) -> Optional[Tuple[str, str]]:
    """
    Split a refresh token into (session_id, raw_secret).

    Returns None when the delimiter is missing or leading, or when either
    half is empty.
    """
    index = token.find(DELIMITER)
    if index <= 0:
        return None

    session_id = token[:index]
    raw_secret = token[index + 1:]
    if not session_id or not raw_secret:
        return None

    return session_id, raw_secret
