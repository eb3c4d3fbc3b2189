from pathlib import Path
import os

from dotenv import load_dotenv

# Load environment variables from the repo root and the working directory (if present).
REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(REPO_ROOT / ".env")
load_dotenv(Path.cwd() / ".env")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./taskflow.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "8000"))

_cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000")
CORS_ORIGINS = [origin.strip() for origin in _cors_origins.split(",") if origin.strip()]

# Client side
API_BASE_URL = os.getenv("TASKFLOW_API_URL", "http://localhost:8000").rstrip("/")
MIRROR_DIR = Path(os.getenv("TASKFLOW_MIRROR_DIR", ".taskflow")).expanduser()

_api_timeout = os.getenv("TASKFLOW_API_TIMEOUT", "").strip()
# None keeps the transport default (no timeout).
API_TIMEOUT = float(_api_timeout) if _api_timeout else None
