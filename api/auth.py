"""Login, logout and role lookup."""

import logging

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from api.errors import APIError
from api.session import Role, authenticate, create_token, current_role
from config import COOKIE_SECURE, COOKIE_SESSION_TOKEN, SESSION_TTL_SECONDS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


class LoginInfo(BaseModel):
    username: str
    password: str


@router.post("/login")
def login(info: LoginInfo, response: Response) -> str:
    """Check credentials and set the session cookie. Returns the role name."""
    role = authenticate(info.username, info.password)
    if role is None:
        logger.info("Failed login for %r", info.username)
        raise APIError(401, "Invalid username or password.")

    response.set_cookie(
        COOKIE_SESSION_TOKEN,
        create_token(role),
        max_age=SESSION_TTL_SECONDS,
        secure=COOKIE_SECURE,
        httponly=True,
        samesite="strict",
    )
    logger.info("%s logged in as %s", info.username, role.value)
    return role.value


@router.post("/logout")
def logout(response: Response) -> None:
    response.delete_cookie(COOKIE_SESSION_TOKEN, secure=COOKIE_SECURE, httponly=True, samesite="strict")


@router.get("/current")
def get_current_role(role: Role = Depends(current_role)) -> str:
    return role.value
