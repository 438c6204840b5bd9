"""Device record store: keyed persistence with a unique device label.

One ``DeviceStore`` wraps one SQLModel session. Every mutating call is a
single transaction: it commits on success and rolls back on failure, so a
failed write never leaves partial state behind.
"""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, func, select

from devtrack.exceptions import DeviceNotFoundError, DuplicateDeviceIdError, ImmutableDeviceFieldError
from devtrack.models.device import Device

logger = logging.getLogger(__name__)

# Columns callers may change through update(); everything else is fixed at insert.
MUTABLE_FIELDS = frozenset({"is_issued", "issued_to", "date_issued"})

# Largest value an SQLite INTEGER primary key can hold
MAX_ROW_ID = 2**63 - 1


class DeviceStore:
    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def insert(self, device: Device) -> Device:
        """Persist a new device. Raises DuplicateDeviceIdError on a label clash."""
        self._session.add(device)
        try:
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            logger.warning("Insert rejected for device %s: %s", device.device_id, e.orig)
            raise DuplicateDeviceIdError() from e
        self._session.refresh(device)
        return device

    def get_by_id(self, id: int) -> Device | None:
        if not 0 < id <= MAX_ROW_ID:
            return None
        return self._session.get(Device, id)

    def get_by_device_id(self, device_id: str) -> Device | None:
        return self._session.exec(
            select(Device).where(Device.device_id == device_id)
        ).first()

    def update(self, id: int, fields: dict[str, Any]) -> Device:
        """Apply ``fields`` to an existing device. Raises DeviceNotFoundError."""
        unknown = set(fields) - MUTABLE_FIELDS
        if unknown:
            raise ImmutableDeviceFieldError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        device = self.get_by_id(id)
        if device is None:
            raise DeviceNotFoundError()

        for name, value in fields.items():
            setattr(device, name, value)
        self._session.add(device)
        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        self._session.refresh(device)
        return device

    def delete(self, id: int) -> None:
        """Remove a device. Unknown ids raise DeviceNotFoundError rather than passing silently."""
        device = self.get_by_id(id)
        if device is None:
            raise DeviceNotFoundError()

        self._session.delete(device)
        try:
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    def list_all(self) -> list[Device]:
        """Full scan, newest first."""
        return list(self._session.exec(
            select(Device).order_by(col(Device.created_at).desc(), col(Device.id).desc())
        ).all())

    def count(self) -> int:
        return self._session.exec(select(func.count()).select_from(Device)).one()
