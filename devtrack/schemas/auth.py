"""Auth request/response schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from devtrack.schemas.device import CamelModel
from devtrack.utils.timeutil import as_aware


class CredentialsRequest(CamelModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=72)

    @field_validator("username")
    @classmethod
    def _strip_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username must not be empty")
        return value


class UserResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return as_aware(value)


class TokenResponse(CamelModel):
    user: UserResponse
    access_token: str
    token_type: str = "bearer"
