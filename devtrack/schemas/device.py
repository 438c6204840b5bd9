"""Device request/response schemas."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from devtrack.utils.timeutil import as_aware


class CamelModel(BaseModel):
    """Accepts both camelCase and snake_case keys; serializes camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeviceStatus(str, Enum):
    ALL = "all"
    AVAILABLE = "available"
    ISSUED = "issued"


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


# --- Requests ---

class DeviceCreateRequest(CamelModel):
    device_id: str = Field(min_length=1, max_length=128)
    date_added: Optional[date] = None  # today when omitted
    is_issued: bool = False
    issued_to: Optional[str] = Field(default=None, max_length=128)
    date_issued: Optional[date] = None

    @field_validator("device_id")
    @classmethod
    def _strip_device_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Device ID must not be empty")
        return value

    @field_validator("issued_to", "date_issued", mode="before")
    @classmethod
    def _empty_is_null(cls, value):
        return _blank_to_none(value)

    @field_validator("issued_to")
    @classmethod
    def _strip_holder(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None


class DeviceUpdateRequest(CamelModel):
    """Partial update. Only fields present in the payload are applied."""

    is_issued: Optional[bool] = None
    issued_to: Optional[str] = Field(default=None, max_length=128)
    date_issued: Optional[date] = None

    @field_validator("issued_to", "date_issued", mode="before")
    @classmethod
    def _empty_is_null(cls, value):
        return _blank_to_none(value)

    @field_validator("issued_to")
    @classmethod
    def _strip_holder(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None


class DeviceIssueRequest(CamelModel):
    issued_to: str = Field(min_length=1, max_length=128)
    date_issued: Optional[date] = None  # today when omitted

    @field_validator("issued_to")
    @classmethod
    def _strip_holder(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Holder name must not be empty")
        return value


# --- Responses ---

class DeviceResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    device_id: str
    date_added: date
    is_issued: bool
    issued_to: Optional[str]
    date_issued: Optional[date]
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return as_aware(value)


class DeviceStatsResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    total_devices: int
    available_devices: int
    issued_devices: int
    added_this_month: int
