from typing import Optional
from pydantic import BaseModel, EmailStr, field_validator


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str


def _check_email_length(value: str) -> str:
    if len(value) > 320:
        raise ValueError('Email must be at most 320 characters')
    return value


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    display_name: Optional[str] = None

    @field_validator('email', mode='before')
    @classmethod
    def validate_email_length(cls, value):
        return _check_email_length(value.strip()) if isinstance(value, str) else value

    @field_validator('password')
    @classmethod
    def validate_password(cls, value):
        """
        Password must be between 8 and 200 characters.
        """
        if len(value) < 8:
            raise ValueError('Password must be at least 8 characters')

        if len(value) > 200:
            raise ValueError('Password must be at most 200 characters')

        return value

    @field_validator('display_name')
    @classmethod
    def validate_display_name(cls, value):
        if value is not None and len(value) > 120:
            raise ValueError('Display name must be at most 120 characters')
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator('email', mode='before')
    @classmethod
    def validate_email_length(cls, value):
        return _check_email_length(value.strip()) if isinstance(value, str) else value

    @field_validator('password')
    @classmethod
    def validate_password(cls, value):
        if not value:
            raise ValueError('Password cannot be empty')
        if len(value) > 200:
            raise ValueError('Password must be at most 200 characters')
        return value


class RefreshTokenRequest(BaseModel):
    refresh_token: str

    @field_validator('refresh_token')
    @classmethod
    def validate_token(cls, value):
        if len(value) < 10:
            raise ValueError('Refresh token must be at least 10 characters')
        return value


class LogoutRequest(RefreshTokenRequest):
    pass
