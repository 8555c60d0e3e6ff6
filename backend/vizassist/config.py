"""
config.py — Application Configuration

Loads settings from environment variables (API keys, sampling limits)
so nothing environment-specific is hard-coded in the source.

Uses Pydantic's BaseSettings which automatically reads from .env files.
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """
    All configuration for the app lives here.
    Values come from environment variables or the .env file.
    """

    # ── App Settings ─────────────────────────────────────────
    APP_NAME: str = "Visualization Assistant"

    # ── Google GenAI (chart image detection) ─────────────────
    GOOGLE_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"
    DETECTION_MAX_RETRIES: int = 2

    # ── CORS (frontend URLs allowed to call this backend) ────
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    # Extra origins from env (comma-separated)
    EXTRA_CORS_ORIGINS: str = ""

    # ── CSV Sampling ─────────────────────────────────────────
    SAMPLE_CHUNK_BYTES: int = 50 * 1024   # only this prefix of an upload is read

    # ── Image Uploads ────────────────────────────────────────
    MAX_IMAGE_SIZE_MB: int = 10
    IMAGE_MAX_WIDTH: int = 512
    IMAGE_JPEG_QUALITY: int = 60

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


# Single instance used throughout the app
settings = Settings()
