from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator


class UserProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    display_name: Optional[str] = None
    is_active: bool
    is_email_verified: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None


class UpdateProfileRequest(BaseModel):
    # omitted leaves the name unchanged, null clears it
    display_name: Optional[str] = None

    @field_validator('display_name')
    @classmethod
    def validate_display_name(cls, value):
        if value is not None and len(value) > 120:
            raise ValueError('Display name must be at most 120 characters')
        return value
