"""User model for authentication."""

import enum

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, enum.Enum):
    """User role enumeration."""

    ADMIN = "admin"
    USER = "user"


class User(BaseModel):
    """Account loaded from configuration. Read-only."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    username: str = Field(..., min_length=1, max_length=150)
    hashed_password: str = Field(..., alias="password_hash", min_length=1)
    role: UserRole = UserRole.USER
    display_name: str | None = None

    @property
    def id(self) -> str:
        return self.username.lower()

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def name(self) -> str:
        return self.display_name or self.username
