"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from devtrack.api.deps import get_current_user, get_settings
from devtrack.config import Settings
from devtrack.database import get_session
from devtrack.models.user import User
from devtrack.schemas.auth import CredentialsRequest, TokenResponse, UserResponse
from devtrack.services.auth_service import authenticate, issue_token, logout_user, register_user

router = APIRouter(tags=["auth"])


def _token_response(user: User, settings: Settings) -> TokenResponse:
    return TokenResponse(
        user=UserResponse.model_validate(user),
        access_token=issue_token(user, settings),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    request: CredentialsRequest,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Create an account and return an access token for it."""
    user = register_user(request.username, request.password, session)
    return _token_response(user, settings)


@router.post("/login", response_model=TokenResponse)
def login(
    request: CredentialsRequest,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Verify credentials and return an access token."""
    user = authenticate(request.username, request.password, session)
    return _token_response(user, settings)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Revoke all access tokens issued to the current user."""
    logout_user(user, session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/user", response_model=UserResponse)
def current_user(user: User = Depends(get_current_user)):
    return user
