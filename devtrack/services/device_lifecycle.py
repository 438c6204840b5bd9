"""Device lifecycle: create, issue, return and delete.

Every write goes through ``_issue_fields`` so the issuance invariant holds
after each call: a device that is not issued never carries a holder or an
issue date, and an issued device always has both. Contradictory input on an
available device is corrected silently rather than rejected.
"""

import logging
from datetime import date
from typing import Any, Optional

from devtrack.exceptions import (
    DeviceAlreadyIssuedError,
    DeviceNotFoundError,
    DuplicateDeviceIdError,
    InvalidIssueStateError,
)
from devtrack.models.device import Device
from devtrack.schemas.device import DeviceCreateRequest, DeviceUpdateRequest
from devtrack.services.device_store import DeviceStore
from devtrack.utils.timeutil import today_in

logger = logging.getLogger(__name__)


def _issue_fields(
    is_issued: bool,
    issued_to: Optional[str],
    date_issued: Optional[date],
) -> dict[str, Any]:
    if not is_issued:
        return {"is_issued": False, "issued_to": None, "date_issued": None}
    if not issued_to or date_issued is None:
        raise InvalidIssueStateError()
    return {"is_issued": True, "issued_to": issued_to, "date_issued": date_issued}


class DeviceLifecycle:
    def __init__(self, store: DeviceStore, tz_name: str = "UTC") -> None:
        self._store = store
        self._tz_name = tz_name

    def create_device(self, data: DeviceCreateRequest) -> Device:
        """Register a new device. Raises DuplicateDeviceIdError if the label is taken."""
        fields = _issue_fields(data.is_issued, data.issued_to, data.date_issued)

        if self._store.get_by_device_id(data.device_id) is not None:
            logger.warning("Rejected duplicate device id %s", data.device_id)
            raise DuplicateDeviceIdError()

        device = Device(
            device_id=data.device_id,
            date_added=data.date_added or today_in(self._tz_name),
            **fields,
        )
        device = self._store.insert(device)
        logger.info("Created device %s (id=%s, issued=%s)", device.device_id, device.id, device.is_issued)
        return device

    def update_device(self, id: int, patch: DeviceUpdateRequest) -> Device:
        """Apply a partial update to the issuance fields.

        Fields absent from the patch keep their stored value. The merged
        state is then normalised, so setting ``is_issued`` to false clears
        the holder and date whatever the patch says about them.
        """
        device = self._store.get_by_id(id)
        if device is None:
            raise DeviceNotFoundError()

        present = patch.model_fields_set
        is_issued = device.is_issued if patch.is_issued is None else patch.is_issued
        issued_to = patch.issued_to if "issued_to" in present else device.issued_to
        date_issued = patch.date_issued if "date_issued" in present else device.date_issued

        updated = self._store.update(id, _issue_fields(is_issued, issued_to, date_issued))
        logger.info("Updated device %s (id=%s, issued=%s)", updated.device_id, id, updated.is_issued)
        return updated

    def issue_device(self, id: int, holder_name: str, issue_date: Optional[date] = None) -> Device:
        """Check a device out to ``holder_name``. Fails if it is already out."""
        device = self._store.get_by_id(id)
        if device is None:
            raise DeviceNotFoundError()
        if device.is_issued:
            raise DeviceAlreadyIssuedError(f"Device is already issued to {device.issued_to}")

        return self.update_device(id, DeviceUpdateRequest(
            is_issued=True,
            issued_to=holder_name,
            date_issued=issue_date or today_in(self._tz_name),
        ))

    def return_device(self, id: int) -> Device:
        """Mark a device available again. Returning an available device changes nothing."""
        return self.update_device(id, DeviceUpdateRequest(is_issued=False))

    def delete_device(self, id: int) -> None:
        """Remove a device permanently, issued or not."""
        self._store.delete(id)
        logger.info("Deleted device id=%s", id)
