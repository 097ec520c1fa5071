"""
User data models.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserBase(BaseModel):
    """Base user model."""
    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class UserInDB(UserBase):
    """User model as stored in database."""
    id: str
    name: str
    password_hash: str
    created_at: datetime
    password_changed_at: Optional[datetime] = None


class UserResponse(UserBase):
    """User model for API responses (no password)."""
    id: str
    name: str


class RegisterRequest(UserBase):
    """Registration request model."""
    name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class RegisterResponse(BaseModel):
    """Registration response model."""
    message: str = "Registered successfully"
    user: UserResponse


class LoginRequest(UserBase):
    """Login request model."""
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Login response with the signed session token."""
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    user: UserResponse


class ChangePasswordRequest(UserBase):
    """Change password request model.

    Accepts the camelCase keys sent by browser clients as well as the
    snake_case field names.
    """
    model_config = ConfigDict(populate_by_name=True)

    old_password: str = Field(..., min_length=1, alias="oldPassword")
    new_password: str = Field(..., min_length=1, alias="newPassword")


class MessageResponse(BaseModel):
    """Plain acknowledgment."""
    message: str


class TokenData(BaseModel):
    """Data encoded in JWT token."""
    user_id: str
    email: str
