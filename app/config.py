"""
Configuration read from environment variables.

A ``.env`` file in the working directory is loaded first when present,
so local overrides do not need to be exported in the shell.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_KEY = "secret-api-key-123"


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Product API"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Shared secret compared against the x-api-key header on mutations.
    api_key: str = field(default_factory=lambda: os.getenv("API_KEY", DEFAULT_API_KEY))


def get_settings() -> Settings:
    return Settings()
