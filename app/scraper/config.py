"""
Application configuration using Pydantic Settings.

Automatically loads environment variables from .env files.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SUBURB_NAMES_PATH = Path(__file__).parent / "data" / "suburbnames.txt"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///data.sqlite"

    # Register page listing the PDF documents
    listing_url: str = (
        "https://www.alexandrina.sa.gov.au/loose-pages/development-application-register"
    )
    comment_url: str = "mailto:alex@alexandrina.sa.gov.au"

    # Suburb reference list (shortName,enrichedName per line)
    suburb_names_path: Path = DEFAULT_SUBURB_NAMES_PATH

    # HTTP retrieval
    morph_proxy: str | None = None
    request_timeout: float = 60.0
    request_delay_seconds: float = 2.0
    request_jitter_seconds: int = 4

    # Debug flags
    sql_debug: bool = False
    debug: bool = False

    model_config = SettingsConfigDict(
        # Load from .env file in the package directory
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        # Case insensitive environment variable names
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration loaded from environment.
    """
    return Settings()
