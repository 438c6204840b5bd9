"""Device listing filters and inventory statistics.

The functions here are pure: they take a sequence of devices and return a
new list or a stats record. ``DeviceQueryService`` binds them to a store and
re-reads the full collection on every call, so results always reflect the
latest committed writes.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from devtrack.models.device import Device
from devtrack.schemas.device import DeviceStatus
from devtrack.services.device_store import DeviceStore
from devtrack.utils.timeutil import as_aware, start_of_month


@dataclass(slots=True)
class DeviceStats:
    total_devices: int = 0
    available_devices: int = 0
    issued_devices: int = 0
    added_this_month: int = 0


def search_devices(devices: Iterable[Device], term: Optional[str]) -> list[Device]:
    """Case-insensitive substring match on the device label."""
    needle = (term or "").strip().casefold()
    if not needle:
        return list(devices)
    return [d for d in devices if needle in d.device_id.casefold()]


def filter_by_status(devices: Iterable[Device], status: DeviceStatus | str = DeviceStatus.ALL) -> list[Device]:
    status = DeviceStatus(status)
    if status is DeviceStatus.AVAILABLE:
        return [d for d in devices if not d.is_issued]
    if status is DeviceStatus.ISSUED:
        return [d for d in devices if d.is_issued]
    return list(devices)


def sort_devices(devices: Iterable[Device]) -> list[Device]:
    """Newest first; ties fall back to the store id, highest first."""
    return sorted(
        devices,
        key=lambda d: (as_aware(d.created_at), d.id or 0),
        reverse=True,
    )


def query_devices(
    devices: Iterable[Device],
    search: Optional[str] = None,
    status: DeviceStatus | str = DeviceStatus.ALL,
) -> list[Device]:
    """Apply the search term AND the status filter, then order the result."""
    matched = filter_by_status(search_devices(devices, search), status)
    return sort_devices(matched)


def compute_stats(devices: Sequence[Device], now: datetime) -> DeviceStats:
    """Count devices by state and those created since the start of ``now``'s month.

    The month boundary is taken in ``now``'s own timezone; a naive ``now`` is
    read as UTC.
    """
    now = as_aware(now)
    month_start = start_of_month(now)

    stats = DeviceStats(total_devices=len(devices))
    for device in devices:
        if device.is_issued:
            stats.issued_devices += 1
        else:
            stats.available_devices += 1
        if as_aware(device.created_at).astimezone(now.tzinfo) >= month_start:
            stats.added_this_month += 1
    return stats


class DeviceQueryService:
    def __init__(self, store: DeviceStore) -> None:
        self._store = store

    def list_devices(
        self,
        search: Optional[str] = None,
        status: DeviceStatus | str = DeviceStatus.ALL,
    ) -> list[Device]:
        return query_devices(self._store.list_all(), search=search, status=status)

    def stats(self, now: Optional[datetime] = None) -> DeviceStats:
        return compute_stats(self._store.list_all(), now or datetime.now(timezone.utc))
