"""Device model."""

from datetime import date, datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class Device(SQLModel, table=True):
    __tablename__ = "devices"

    id: Optional[int] = Field(default=None, primary_key=True)
    device_id: str = Field(unique=True, index=True)  # user-facing label, e.g. AUV-SENSOR-001
    date_added: date
    is_issued: bool = Field(default=False)
    issued_to: Optional[str] = None  # holder name, only while issued
    date_issued: Optional[date] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
