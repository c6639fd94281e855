# backend/vcat/schemas/user.py
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, EmailStr

from vcat.models.user import UserRole


class UserBase(BaseModel):
    username: str
    email: EmailStr


class UserCreate(UserBase):
    password: str


class UserResponse(UserBase):
    id: UUID
    role: UserRole
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
