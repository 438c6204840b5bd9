"""Authentication business logic: registration, login, token checks."""

import logging

import jwt
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from devtrack.config import Settings
from devtrack.exceptions import InvalidCredentialsError, InvalidTokenError, UsernameTakenError
from devtrack.models.user import User
from devtrack.utils.security import create_access_token, decode_token, hash_password, verify_password

logger = logging.getLogger(__name__)


def get_user_by_username(username: str, session: Session) -> User | None:
    return session.exec(select(User).where(User.username == username)).first()


def register_user(username: str, password: str, session: Session) -> User:
    """Create a user with a bcrypt-hashed password."""
    if get_user_by_username(username, session) is not None:
        raise UsernameTakenError()

    user = User(username=username, password_hash=hash_password(password))
    session.add(user)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise UsernameTakenError() from e
    session.refresh(user)
    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return user


def authenticate(username: str, password: str, session: Session) -> User:
    user = get_user_by_username(username, session)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Failed login for %s", username)
        raise InvalidCredentialsError()
    return user


def issue_token(user: User, settings: Settings) -> str:
    return create_access_token(user.id, user.token_version, settings)


def resolve_token(token: str, session: Session, settings: Settings) -> User:
    """Return the user an access token belongs to, or raise InvalidTokenError."""
    try:
        payload = decode_token(token, settings)
    except jwt.PyJWTError:
        raise InvalidTokenError()

    if payload.get("type") != "access":
        raise InvalidTokenError("Invalid token type")

    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise InvalidTokenError()

    user = session.get(User, user_id)
    if user is None:
        raise InvalidTokenError("User not found")
    if payload.get("ver") != user.token_version:
        raise InvalidTokenError("Token has been revoked")
    return user


def logout_user(user: User, session: Session) -> None:
    """Invalidate every token issued to this user so far."""
    user.token_version += 1
    session.add(user)
    session.commit()
    logger.info("Logged out user %s", user.username)
