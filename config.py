"""newsroom configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).parent / ".env")

# --- Paths ---
BASE_DIR = Path(__file__).parent
DATA_DIR = BASE_DIR / "data"
DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR / 'newsroom.db'}")
ARTICLE_IMAGE_PATH = Path(os.getenv("ARTICLE_IMAGE_PATH", str(DATA_DIR / "images")))
BUILD_DIR = Path(os.getenv("BUILD_DIR", str(BASE_DIR / "build")))

# --- API ---
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))
CORS_ORIGINS: list[str] = [
    o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()
]
DEFAULT_PAGE_LIMIT: int = 10

# --- Auth ---
JWT_SECRET: str = os.getenv("JWT_SECRET", "")
JWT_ALGORITHM = "HS512"
SESSION_TTL_SECONDS: int = int(os.getenv("SESSION_TTL_SECONDS", str(60 * 60 * 12)))
COOKIE_SESSION_TOKEN = "session_token"
COOKIE_SECURE: bool = os.getenv("COOKIE_SECURE", "true").lower() != "false"

ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "")
ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")
EDITOR_USERNAME: str = os.getenv("EDITOR_USERNAME", "")
EDITOR_PASSWORD: str = os.getenv("EDITOR_PASSWORD", "")

# --- Google Drive ---
GOOGLE_CLIENT_SECRET_PATH: str = os.getenv("GOOGLE_CLIENT_SECRET_PATH", "")
DRIVE_API_BASE = "https://www.googleapis.com/drive/v3"
DRIVE_SCOPE = "https://www.googleapis.com/auth/drive"
DRIVE_DRAFTS_FOLDER_ID: str = os.getenv("DRIVE_DRAFTS_FOLDER_ID", "1BELyMOBd1Orod-Iwn0_Jf7ZHOEydsJb7")
DRIVE_FINALS_FOLDER_ID: str = os.getenv("DRIVE_FINALS_FOLDER_ID", "1gDcjDPnt9SU8uM0kAS_H6Ubx0QubjVdw")
DRIVE_TIMEOUT: int = 30
