from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Literal

Role = Literal["admin", "editor", "viewer"]

class UserCreateIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str | None = None
    role: Role = "viewer"
    is_active: bool = True

class UserUpdateIn(BaseModel):
    # Sadece gönderilen alanlar güncellenir
    email: EmailStr | None = None
    name: str | None = None
    role: Role | None = None
    is_active: bool | None = None

class PasswordChangeIn(BaseModel):
    new_password: str = Field(min_length=6)

class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    email: EmailStr
    name: str | None
    role: Role
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

class ProfileOut(UserOut):
    image_url: str | None = None
    bio: str | None = None
    phone: str | None = None
    timezone: str | None = None
    language: str | None = None

class ProfileUpdateIn(BaseModel):
    name: str | None = None
    email: EmailStr | None = None
    image_url: str | None = None
    bio: str | None = None
    phone: str | None = None
    timezone: str | None = None
    language: str | None = None
