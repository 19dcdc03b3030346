"""Request/response schemas for admin user management."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class UserCreateRequest(BaseModel):
    """New ordinary user. Admins are only created by seeding or the CLI."""

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class UserAccount(BaseModel):
    """User entry as exposed by reads (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str
    created_at: datetime | None = None


class UsersListResponse(BaseModel):
    """Response for GET /admin/users (admin only)."""

    success: bool = True
    users: list[UserAccount]


class UserCreateResponse(BaseModel):
    success: bool = True
    message: str = "User created successfully"
    user: UserAccount
