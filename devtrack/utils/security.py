"""Security utilities: password hashing and JWT tokens."""

from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from devtrack.config import Settings

# bcrypt only looks at the first 72 bytes
_BCRYPT_MAX_BYTES = 72


# --- Password Hashing ---

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode()[:_BCRYPT_MAX_BYTES], bcrypt.gensalt()).decode()


def verify_password(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    return bcrypt.checkpw(password.encode()[:_BCRYPT_MAX_BYTES], hashed.encode())


# --- JWT Tokens ---

def create_access_token(user_id: int, token_version: int, settings: Settings) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": str(user_id),
        "ver": token_version,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> dict:
    """Decode and validate a JWT token. Raises jwt.PyJWTError on failure."""
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
