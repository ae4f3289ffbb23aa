"""Configuration: env, data paths, API and admin token."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of hotspotmaker package)
BASE_DIR = Path(__file__).resolve().parent.parent
PACKAGE_DIR = Path(__file__).resolve().parent

# Load .env from project root so HOTSPOT_ADMIN_TOKEN etc. are set
load_dotenv(BASE_DIR / ".env")

DATA_DIR = Path(os.getenv("HOTSPOT_DATA_DIR", str(BASE_DIR / "data")))
SECTIONS_PATH = DATA_DIR / "hotspot_sections.json"
STATIC_DIR = PACKAGE_DIR / "static"

# API
API_HOST = os.getenv("HOTSPOT_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("HOTSPOT_API_PORT", "8000"))
CORS_ORIGINS = [
    o.strip() for o in os.getenv("HOTSPOT_CORS_ORIGINS", "*").split(",") if o.strip()
]

# Editing routes require this token when set (empty = open, for local use)
ADMIN_TOKEN = os.getenv("HOTSPOT_ADMIN_TOKEN", "")

# Meta keys stored per section
META_IMAGE = "hotspot_image"
META_SPOTS = "hotspot_spots"


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
