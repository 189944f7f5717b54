from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Building Shell Navigation API"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Building-management backend (Laravel Sanctum)
    # -------------------------------------------------
    API_BASE_URL: str = Field(
        "https://api.automatedlife.io/api/v1",
        description="Base URL of the building-management REST API",
    )
    API_TOKEN: Optional[str] = Field(None, description="Bearer token sent with backend requests")
    API_TIMEOUT_SECONDS: float = Field(30.0, description="Connect/read timeout for backend calls")

    # -------------------------------------------------
    # Capability cache
    # -------------------------------------------------
    # Unset = entries live for the session (cleared on refresh / building switch)
    CAPABILITY_CACHE_TTL_SECONDS: Optional[int] = Field(
        None,
        description="Per-building capability cache TTL in seconds (default: session lifetime)",
    )

    # -------------------------------------------------
    # Icons
    # -------------------------------------------------
    ICON_WARM_UP: bool = Field(True, description="Pre-resolve common icons on startup")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Normalize backend URL + CORS list after loading settings
# -------------------------------------------------
settings.API_BASE_URL = settings.API_BASE_URL.rstrip("/")
settings.BACKEND_CORS_ORIGINS = sorted(
    {origin.rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS}
)
