"""Configuration management and environment variable loading."""

import logging
import os
from dotenv import load_dotenv

# Load environment variables from .env file (don't override existing env vars)
load_dotenv(override=False)

logger = logging.getLogger(__name__)


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _positive_int(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to ``default``."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip(), 10)
    except ValueError:
        value = 0
    if value <= 0:
        logger.warning(f"Ignoring {name}={raw!r}: expected a positive integer, using {default}")
        return default
    return value


class Config:
    """Application configuration."""

    # CLI defaults - each can be overridden from the environment
    DEFAULT_FPS: int = _positive_int("YT2GIF_FPS", 15)
    DEFAULT_WIDTH: int = _positive_int("YT2GIF_WIDTH", 800)
    DEFAULT_SUBTITLE_SIZE: int = _positive_int("YT2GIF_SUBTITLE_SIZE", 24)

    # Clips longer than this still render, but with a warning
    MAX_RECOMMENDED_DURATION: int = _positive_int("YT2GIF_MAX_DURATION", 60)

    # Empty list lets yt-dlp pick its default subtitle language
    SUBTITLE_LANGS: list[str] = _split_list(os.getenv("YT2GIF_SUBTITLE_LANGS", ""))

    # YouTube cookies for bypassing bot detection (optional)
    # Set to path of cookies.txt file exported from browser
    YOUTUBE_COOKIES_TXT: str = os.getenv("YOUTUBE_COOKIES_TXT", "")

    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY", "ffmpeg")
    LOG_LEVEL: str = os.getenv("YT2GIF_LOG_LEVEL", "INFO")
