import uuid
from sqlalchemy.sql import func
from sqlalchemy import Column, DateTime, String


def new_uuid() -> str:
    return str(uuid.uuid4())


class UUIDPrimaryKeyMixin:
    id = Column(String(36), primary_key=True, default=new_uuid)
class CreatedAtMixin:
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)
class UpdatedAtMixin:
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now(), nullable=False)
