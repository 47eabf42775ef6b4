from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()  # searches for .env in CWD/parents

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_EDIT_MODEL = "gemini-2.5-flash-image"
DEFAULT_MAX_UPLOAD_MB = 5.0
DOWNLOAD_FILENAME = "ana-sharif-reimagined.png"

# picker accept list: image/png, image/jpeg, image/jpg, image/webp
ALLOWED_MIME_TYPES = ("image/png", "image/jpeg", "image/webp")


@dataclass(frozen=True)
class Settings:
    image_model: str = DEFAULT_IMAGE_EDIT_MODEL
    max_upload_bytes: int = int(DEFAULT_MAX_UPLOAD_MB * 1024 * 1024)
    request_timeout: Optional[float] = None
    download_filename: str = DOWNLOAD_FILENAME


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("ignoring %s=%r: not a number, using %s", name, raw, default)
        return default
    if not math.isfinite(value) or value <= 0:
        logger.warning("ignoring %s=%r: must be a positive number, using %s", name, raw, default)
        return default
    return value


def load_settings() -> Settings:
    """Read settings from the environment (after `.env` has been loaded).

    Malformed numbers fall back to the defaults with a warning.
    """
    max_mb = _env_float("REIMAGINER_MAX_UPLOAD_MB", DEFAULT_MAX_UPLOAD_MB)
    return Settings(
        image_model=os.getenv("GEMINI_IMAGE_EDIT_MODEL", "") or DEFAULT_IMAGE_EDIT_MODEL,
        max_upload_bytes=int((max_mb or DEFAULT_MAX_UPLOAD_MB) * 1024 * 1024),
        request_timeout=_env_float("GEMINI_REQUEST_TIMEOUT", None),
    )


def get_api_key() -> Optional[str]:
    key = os.getenv("GEMINI_API_KEY")
    if key:
        return key
    # Optional: read from ~/.config/gemini/api_key
    cfg_path = Path.home() / ".config" / "gemini" / "api_key"
    try:
        if cfg_path.exists():
            return cfg_path.read_text().strip() or None
    except OSError:
        return None
    return None
