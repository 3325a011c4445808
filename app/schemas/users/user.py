# app/schemas/users/user.py
from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime
import re

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

class UserRegisterRequest(BaseModel):
    email: Optional[str] = Field(None, description="Login email")
    password: Optional[str] = Field(None, description="Plain password, hashed before storage")
    nick_name: Optional[str] = Field(None, max_length=50, description="Public nickname")

    @validator('email')
    def validate_email(cls, v):
        if v is not None and v.strip() and not EMAIL_PATTERN.match(v.strip()):
            raise ValueError('Invalid email format')
        return v

    @validator('password')
    def validate_password(cls, v):
        if v is not None and v.strip() and len(v) < 4:
            raise ValueError('Password must be at least 4 characters')
        return v

class UserRegisterResponse(BaseModel):
    email: str
    nick_name: str
    join_date: datetime

class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class LoginResponse(BaseModel):
    email: str
    nick_name: str
    token: str
    role: str
    profile_image_url: Optional[str] = None

class UserUpdateRequest(BaseModel):
    nick_name: Optional[str] = Field(None, min_length=2, max_length=50)
    password: Optional[str] = Field(None, min_length=4)

class UserResponse(BaseModel):
    id: str
    email: str
    nick_name: str
    role: str
    has_profile_image: bool
    join_date: datetime

class OAuthHandoffResponse(BaseModel):
    provider: str
    received: bool
