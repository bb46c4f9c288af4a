# File: app/schemas/user.py

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    email: EmailStr


class UserCreate(UserBase):
    username: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6)


class LoginRequest(UserBase):
    password: str


class UserRead(UserBase):
    model_config = {"from_attributes": True}

    id: int
    username: str
    created_at: datetime
