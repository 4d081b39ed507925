"""newsroom: FastAPI application."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from api import APIError, register_error_handlers, routers
from config import API_HOST, API_PORT, ARTICLE_IMAGE_PATH, BUILD_DIR, CORS_ORIGINS
from db.database import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize DB and image storage on startup."""
    init_db()
    ARTICLE_IMAGE_PATH.mkdir(parents=True, exist_ok=True)
    yield


app = FastAPI(
    title="newsroom",
    description="Content management backend for articles, writers and Drive imports",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

for router in routers:
    app.include_router(router)

fallback = APIRouter(prefix="/api")


@fallback.get("/health")
def health() -> dict[str, str]:
    """Healthcheck endpoint."""
    return {"status": "ok", "service": "newsroom"}


@fallback.api_route("/{rest:path}", methods=["GET", "POST", "PATCH", "PUT", "DELETE"], include_in_schema=False)
def api_fallback(rest: str) -> None:
    raise APIError.not_found("Invalid endpoint.")


app.include_router(fallback)

# Stored images: /image/<year>/<month>/<name>.<extension>
app.mount("/image", StaticFiles(directory=ARTICLE_IMAGE_PATH, check_dir=False), name="image")


@app.get("/{files:path}", include_in_schema=False)
def index(files: str) -> FileResponse:
    """Serve the built frontend, falling back to its index.html for client routes."""
    build_dir = Path(BUILD_DIR).resolve()
    path = (build_dir / files).resolve()
    if path.is_file() and build_dir in path.parents:
        return FileResponse(path)

    index_html = build_dir / "index.html"
    if not index_html.is_file():
        raise APIError.not_found("Unable to locate resource")
    return FileResponse(index_html)


if __name__ == "__main__":
    uvicorn.run("main:app", host=API_HOST, port=API_PORT, reload=True)
