"""Authentication schemas."""

import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

PASSWORD_MIN_LENGTH = 6


class UserCredentials(BaseModel):
    """Email and password pair sent to signup and login."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class UserRegister(UserCredentials):
    """User signup request."""


class UserLogin(UserCredentials):
    """User login request."""


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
