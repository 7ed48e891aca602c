"""Application configuration. Loads from environment and .env file."""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
# Load .env from cwd, then backend/.env, then project root .env
load_dotenv()
load_dotenv(BASE_DIR / ".env")
load_dotenv(BASE_DIR.parent / ".env")

# Supported input formats (compared lowercased)
IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".bmp", ".gif", ".tif", ".tiff"}

# Output subfolder created inside the source folder
OUTPUT_FOLDER_NAME = os.getenv("OUTPUT_FOLDER_NAME", "resultado").strip() or "resultado"

# Variant naming and messages: "es" (chico/mediano/grande) or "en" (small/medium/large)
VARIANT_LANGUAGE = os.getenv("VARIANT_LANGUAGE", "es").strip().lower()
VARIANT_NAMES = {
    "es": ("chico", "mediano", "grande"),
    "en": ("small", "medium", "large"),
}

# Fixed variants: (width, quality) for small, medium, large
FIXED_VARIANTS = ((400, 75), (800, 80), (1200, 85))

# WebP encoder: "lossy" uses the variant quality; "lossless" uses it as effort
WEBP_ENCODING = os.getenv("WEBP_ENCODING", "lossy").strip().lower()
WEBP_ENCODINGS = ("lossy", "lossless")
WEBP_METHOD = int(os.getenv("WEBP_METHOD", "4"))

# Defaults shown for custom variants (base width is the large variant)
DEFAULT_BASE_WIDTH = int(os.getenv("DEFAULT_BASE_WIDTH", "1200"))
DEFAULT_MEDIUM_PERCENT = float(os.getenv("DEFAULT_MEDIUM_PERCENT", "66.67"))
DEFAULT_SMALL_PERCENT = float(os.getenv("DEFAULT_SMALL_PERCENT", "33.33"))
DEFAULT_QUALITY_SMALL = int(os.getenv("DEFAULT_QUALITY_SMALL", "75"))
DEFAULT_QUALITY_MEDIUM = int(os.getenv("DEFAULT_QUALITY_MEDIUM", "80"))
DEFAULT_QUALITY_LARGE = int(os.getenv("DEFAULT_QUALITY_LARGE", "85"))

# Server (for uvicorn)
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))
# CORS: comma-separated origins, e.g. "http://localhost:5173,http://127.0.0.1:5173"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",") if o.strip()]

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("converter")
