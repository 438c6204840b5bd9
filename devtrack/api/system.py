"""System status API endpoints."""

from fastapi import APIRouter, Depends

from devtrack import __version__
from devtrack.api.deps import get_current_user, get_device_store, get_settings
from devtrack.config import Settings
from devtrack.models.user import User
from devtrack.schemas.system import SystemStatusResponse
from devtrack.services.device_store import DeviceStore

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/ping")
def system_ping():
    """Lightweight health check (no auth required)."""
    return {"status": "ok"}


@router.get("/status", response_model=SystemStatusResponse)
def system_status(
    user: User = Depends(get_current_user),
    store: DeviceStore = Depends(get_device_store),
    settings: Settings = Depends(get_settings),
):
    return SystemStatusResponse(
        name=settings.app_name,
        version=__version__,
        device_count=store.count(),
        timezone=settings.timezone,
    )
