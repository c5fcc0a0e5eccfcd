from pathlib import Path
import os
from dotenv import load_dotenv
from loguru import logger

# Point to the .env file in the project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent
ENV_PATH = PROJECT_ROOT / ".env"
load_dotenv(dotenv_path=ENV_PATH)


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")

GALLERY_ANALYSIS_MODEL = os.getenv("GALLERY_ANALYSIS_MODEL", "gpt-4o-mini")
GALLERY_EDIT_MODEL = os.getenv("GALLERY_EDIT_MODEL", "gpt-image-1")

GALLERY_LOG_LEVEL = os.getenv("GALLERY_LOG_LEVEL", "INFO")
GALLERY_LOG_DIR = os.getenv("GALLERY_LOG_DIR") or None

GALLERY_SEED_PHOTOS = _flag("GALLERY_SEED_PHOTOS", True)


def mask(value: str | None) -> str:
    if not value:
        return "MISSING"
    if len(value) <= 8:
        return "***"
    return value[:4] + "..." + value[-4:]


def log_config_summary() -> None:
    logger.info("Config summary:")
    logger.info("  OPENAI_API_KEY = {}", mask(OPENAI_API_KEY))
    logger.info("  GALLERY_ANALYSIS_MODEL = {}", GALLERY_ANALYSIS_MODEL)
    logger.info("  GALLERY_EDIT_MODEL = {}", GALLERY_EDIT_MODEL)
    logger.info("  GALLERY_LOG_DIR = {}", GALLERY_LOG_DIR or "(stderr only)")
