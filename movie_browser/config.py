"""Configuration loading from .env file."""

import os
from dotenv import load_dotenv

# Load .env file
load_dotenv()


class Config:
    """Application configuration."""

    # TMDB
    TMDB_API_KEY: str = os.getenv("TMDB_API_KEY", "")
    TMDB_BASE_URL: str = os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3")
    TMDB_IMAGE_BASE_URL: str = os.getenv("TMDB_IMAGE_BASE_URL", "https://image.tmdb.org/t/p/")
    TMDB_LANGUAGE: str = os.getenv("TMDB_LANGUAGE", "en-US")
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "10"))

    # UI behaviour
    NARROW_VIEWPORT_MAX: int = int(os.getenv("NARROW_VIEWPORT_MAX", "768"))
    DISCARD_STALE_RESPONSES: bool = os.getenv("DISCARD_STALE_RESPONSES", "true").lower() == "true"

    # Web interface
    WEB_HOST: str = os.getenv("WEB_HOST", "0.0.0.0")
    WEB_PORT: int = int(os.getenv("WEB_PORT", "8000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> list[str]:
        """Validate required configuration. Returns list of errors."""
        errors = []

        if not cls.TMDB_API_KEY:
            errors.append("TMDB_API_KEY is required to query The Movie Database")

        if not cls.TMDB_BASE_URL.startswith(("http://", "https://")):
            errors.append(f"TMDB_BASE_URL must be an http(s) URL, got {cls.TMDB_BASE_URL!r}")

        if cls.REQUEST_TIMEOUT <= 0:
            errors.append("REQUEST_TIMEOUT must be positive")

        return errors
