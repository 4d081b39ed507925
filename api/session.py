"""Role-based session tokens and the route guards built on them."""

import enum
import logging
import secrets
from datetime import datetime, timedelta, timezone

from fastapi import Depends, Request
from jose import JWTError, jwt

from api.errors import APIError
from config import (
    ADMIN_PASSWORD,
    ADMIN_USERNAME,
    COOKIE_SESSION_TOKEN,
    EDITOR_PASSWORD,
    EDITOR_USERNAME,
    JWT_ALGORITHM,
    JWT_SECRET,
    SESSION_TTL_SECONDS,
)

logger = logging.getLogger(__name__)

_BEARER = "Bearer "


class Role(str, enum.Enum):
    ADMIN = "Admin"
    EDITOR = "Editor"
    DEFAULT = "Default"


def _secret() -> str:
    if not JWT_SECRET:
        raise RuntimeError("JWT_SECRET must be set")
    return JWT_SECRET


def create_token(role: Role, ttl_seconds: int | None = None) -> str:
    """Signed session token carrying the role and an expiry."""
    ttl = SESSION_TTL_SECONDS if ttl_seconds is None else ttl_seconds
    expires = datetime.now(timezone.utc) + timedelta(seconds=ttl)
    claims = {"role": role.value, "exp": int(expires.timestamp())}
    return jwt.encode(claims, _secret(), algorithm=JWT_ALGORITHM)


def decode_role(token: str) -> Role:
    """Role in a token; anything invalid or expired is ``Role.DEFAULT``."""
    try:
        claims = jwt.decode(token, _secret(), algorithms=[JWT_ALGORITHM])
        return Role(claims.get("role"))
    except (JWTError, ValueError):
        return Role.DEFAULT


def authenticate(username: str, password: str) -> Role | None:
    """Match credentials against the configured admin and editor accounts."""
    accounts = [
        (Role.ADMIN, ADMIN_USERNAME, ADMIN_PASSWORD),
        (Role.EDITOR, EDITOR_USERNAME, EDITOR_PASSWORD),
    ]
    for role, expected_user, expected_password in accounts:
        if not expected_user or not expected_password:
            continue
        user_ok = secrets.compare_digest(username.encode(), expected_user.encode())
        password_ok = secrets.compare_digest(password.encode(), expected_password.encode())
        if user_ok and password_ok:
            return role
    return None


def current_role(request: Request) -> Role:
    """Role of the caller, from the session cookie or a bearer header."""
    token = request.cookies.get(COOKIE_SESSION_TOKEN)
    if not token:
        header = request.headers.get("Authorization", "")
        if header.startswith(_BEARER):
            token = header[len(_BEARER):]
    if not token:
        return Role.DEFAULT
    return decode_role(token)


def require_admin(role: Role = Depends(current_role)) -> Role:
    if role != Role.ADMIN:
        raise APIError.unauthorized()
    return role


def require_editor(role: Role = Depends(current_role)) -> Role:
    if role not in (Role.ADMIN, Role.EDITOR):
        raise APIError.unauthorized()
    return role
