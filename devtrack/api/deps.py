"""Common API dependencies: settings, persistence handles, current user."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from devtrack.config import Settings
from devtrack.database import get_session
from devtrack.exceptions import InvalidTokenError
from devtrack.models.user import User
from devtrack.services.auth_service import resolve_token
from devtrack.services.device_lifecycle import DeviceLifecycle
from devtrack.services.device_query import DeviceQueryService
from devtrack.services.device_store import DeviceStore

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> User:
    """Extract and validate user from the bearer access token."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return resolve_token(credentials.credentials, session, settings)
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_device_store(session: Session = Depends(get_session)) -> DeviceStore:
    return DeviceStore(session)


def get_device_lifecycle(
    store: DeviceStore = Depends(get_device_store),
    settings: Settings = Depends(get_settings),
) -> DeviceLifecycle:
    return DeviceLifecycle(store, tz_name=settings.timezone)


def get_device_queries(store: DeviceStore = Depends(get_device_store)) -> DeviceQueryService:
    return DeviceQueryService(store)
