# core/config_validator.py

from typing import List
from core.config import settings
from core.logging_config import logger


def validate_required_config() -> List[str]:
    """
    Validate that all required environment variables are set.
    Returns list of missing or invalid required variables.
    """
    missing = []

    # Required for capability fetches
    if not settings.API_BASE_URL:
        missing.append("API_BASE_URL")
    elif not settings.API_BASE_URL.startswith(("http://", "https://")):
        missing.append("API_BASE_URL (must start with http:// or https://)")

    if settings.API_TIMEOUT_SECONDS <= 0:
        missing.append("API_TIMEOUT_SECONDS (must be positive)")

    return missing


def validate_optional_config() -> List[str]:
    """
    Validate optional but recommended configuration.
    Returns list of missing optional variables (warnings only).
    """
    warnings = []

    if not settings.API_TOKEN:
        warnings.append("API_TOKEN (capability requests will be unauthenticated)")

    if settings.CAPABILITY_CACHE_TTL_SECONDS is not None and settings.CAPABILITY_CACHE_TTL_SECONDS <= 0:
        warnings.append("CAPABILITY_CACHE_TTL_SECONDS (non-positive value disables caching)")

    return warnings


def validate_config_on_startup():
    """
    Validate configuration on application startup.
    Raises RuntimeError if critical config is missing.
    Logs warnings for optional config.
    """
    missing_required = validate_required_config()
    missing_optional = validate_optional_config()

    if missing_required:
        error_msg = f"Missing required environment variables: {', '.join(missing_required)}"
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    if missing_optional:
        for warning in missing_optional:
            logger.warning(f"Optional configuration missing: {warning}")

    logger.info("Configuration validation passed")
