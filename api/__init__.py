from fastapi import APIRouter

from api.articles import router as articles_router
from api.auth import router as auth_router
from api.drive import router as drive_router
from api.errors import APIError, register_error_handlers
from api.submissions import router as submissions_router
from api.uploads import router as uploads_router
from api.writers import router as writers_router

routers: list[APIRouter] = [
    articles_router,
    writers_router,
    submissions_router,
    auth_router,
    drive_router,
    uploads_router,
]

__all__ = ["APIError", "register_error_handlers", "routers"]
