# app/db/models/users/user.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
import uuid

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class User(SQLModel, table=True):
    __tablename__ = "users"
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    email: str = Field(max_length=100, unique=True, index=True)
    password: str = Field(max_length=255)
    nick_name: str = Field(max_length=50, unique=True, index=True)
    role: str = Field(max_length=20, default="COMMON")
    login_method: str = Field(max_length=20, default="COMMON")
    profile_image_path: Optional[str] = Field(max_length=255, default=None)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
