"""
Typed failures raised by the session lifecycle service.

The service never builds HTTP responses itself. Each error carries the
status code the boundary should answer with, and main.py translates it.
"""

from starlette import status


class AuthError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ConflictError(AuthError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Email already registered"


class UnauthorizedError(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Could not validate credentials."


class NotFoundError(AuthError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "User not found"
