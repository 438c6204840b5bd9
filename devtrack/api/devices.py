"""Device inventory API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from devtrack.api.deps import (
    get_current_user,
    get_device_lifecycle,
    get_device_queries,
    get_device_store,
    get_settings,
)
from devtrack.config import Settings
from devtrack.exceptions import DeviceNotFoundError
from devtrack.schemas.device import (
    DeviceCreateRequest,
    DeviceIssueRequest,
    DeviceResponse,
    DeviceStatsResponse,
    DeviceStatus,
    DeviceUpdateRequest,
)
from devtrack.services.device_lifecycle import DeviceLifecycle
from devtrack.services.device_query import DeviceQueryService
from devtrack.services.device_store import DeviceStore
from devtrack.utils.timeutil import now_in

router = APIRouter(
    prefix="/devices",
    tags=["devices"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=list[DeviceResponse])
def list_devices(
    search: Optional[str] = Query(default=None, description="Substring of the device ID"),
    status_filter: str = Query(default="all", alias="status", pattern="^(all|available|issued)?$"),
    queries: DeviceQueryService = Depends(get_device_queries),
):
    """List devices, newest first, narrowed by search term and status."""
    return queries.list_devices(search=search, status=DeviceStatus(status_filter or "all"))


@router.get("/stats", response_model=DeviceStatsResponse)
def device_stats(
    queries: DeviceQueryService = Depends(get_device_queries),
    settings: Settings = Depends(get_settings),
):
    """Inventory totals, plus devices added since the start of this month."""
    return queries.stats(now=now_in(settings.timezone))


@router.get("/{id}", response_model=DeviceResponse)
def get_device(id: int, store: DeviceStore = Depends(get_device_store)):
    device = store.get_by_id(id)
    if device is None:
        raise DeviceNotFoundError()
    return device


@router.post("", response_model=DeviceResponse, status_code=status.HTTP_201_CREATED)
def create_device(
    request: DeviceCreateRequest,
    lifecycle: DeviceLifecycle = Depends(get_device_lifecycle),
):
    """Register a new device."""
    return lifecycle.create_device(request)


@router.patch("/{id}", response_model=DeviceResponse)
def update_device(
    id: int,
    request: DeviceUpdateRequest,
    lifecycle: DeviceLifecycle = Depends(get_device_lifecycle),
):
    """Update a device's issue state (issue, reassign or return)."""
    return lifecycle.update_device(id, request)


@router.post("/{id}/issue", response_model=DeviceResponse)
def issue_device(
    id: int,
    request: DeviceIssueRequest,
    lifecycle: DeviceLifecycle = Depends(get_device_lifecycle),
):
    """Issue an available device. Already issued devices are rejected."""
    return lifecycle.issue_device(id, request.issued_to, request.date_issued)


@router.post("/{id}/return", response_model=DeviceResponse)
def return_device(
    id: int,
    lifecycle: DeviceLifecycle = Depends(get_device_lifecycle),
):
    return lifecycle.return_device(id)


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_device(
    id: int,
    lifecycle: DeviceLifecycle = Depends(get_device_lifecycle),
):
    """Delete a device permanently."""
    lifecycle.delete_device(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
