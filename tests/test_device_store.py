"""Device record store: uniqueness, lookups, updates and deletes."""

from datetime import date, datetime, timezone

import pytest

from devtrack.exceptions import DeviceNotFoundError, DuplicateDeviceIdError, ImmutableDeviceFieldError
from devtrack.models.device import Device


def _device(device_id: str) -> Device:
    return Device(device_id=device_id, date_added=date(2024, 1, 1))


def test_insert_assigns_id_and_created_at(store):
    device = store.insert(_device("AUV-SENSOR-001"))
    assert device.id is not None
    assert device.created_at is not None
    assert device.is_issued is False


def test_ids_increase(store):
    first = store.insert(_device("A"))
    second = store.insert(_device("B"))
    assert second.id > first.id


def test_insert_duplicate_device_id_fails_and_keeps_store(store):
    store.insert(_device("AUV-1"))
    with pytest.raises(DuplicateDeviceIdError):
        store.insert(_device("AUV-1"))
    assert [d.device_id for d in store.list_all()] == ["AUV-1"]
    # Session is still usable after the rollback
    store.insert(_device("AUV-2"))
    assert store.count() == 2


def test_get_by_id_and_device_id(store):
    device = store.insert(_device("AUV-7"))
    assert store.get_by_id(device.id).device_id == "AUV-7"
    assert store.get_by_device_id("AUV-7").id == device.id
    assert store.get_by_id(9999) is None
    assert store.get_by_device_id("nope") is None


def test_update_changes_fields(store):
    device = store.insert(_device("AUV-3"))
    updated = store.update(device.id, {"is_issued": True, "issued_to": "Alice", "date_issued": date(2024, 2, 1)})
    assert updated.is_issued is True
    assert updated.issued_to == "Alice"
    assert updated.date_issued == date(2024, 2, 1)


def test_update_unknown_id_raises_not_found(store):
    with pytest.raises(DeviceNotFoundError):
        store.update(404, {"is_issued": False})


def test_update_rejects_immutable_fields(store):
    device = store.insert(_device("AUV-4"))
    with pytest.raises(ImmutableDeviceFieldError):
        store.update(device.id, {"device_id": "renamed"})
    assert store.get_by_id(device.id).device_id == "AUV-4"


def test_delete_removes_device(store):
    device = store.insert(_device("AUV-5"))
    store.delete(device.id)
    assert store.get_by_id(device.id) is None
    assert store.count() == 0


def test_delete_unknown_id_raises_not_found(store):
    with pytest.raises(DeviceNotFoundError):
        store.delete(12345)


def test_list_all_newest_first(store):
    old = _device("OLD")
    old.created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
    new = _device("NEW")
    new.created_at = datetime(2024, 6, 1, tzinfo=timezone.utc)
    store.insert(old)
    store.insert(new)
    assert [d.device_id for d in store.list_all()] == ["NEW", "OLD"]


def test_list_all_ties_broken_by_id(store):
    stamp = datetime(2024, 5, 5, 12, 0, tzinfo=timezone.utc)
    for label in ("FIRST", "SECOND", "THIRD"):
        device = _device(label)
        device.created_at = stamp
        store.insert(device)
    assert [d.device_id for d in store.list_all()] == ["THIRD", "SECOND", "FIRST"]


@pytest.mark.parametrize("id", [0, -1, 2**63, 10**20])
def test_out_of_range_ids_are_absent(store, id):
    assert store.get_by_id(id) is None
    with pytest.raises(DeviceNotFoundError):
        store.update(id, {"is_issued": False})
    with pytest.raises(DeviceNotFoundError):
        store.delete(id)
