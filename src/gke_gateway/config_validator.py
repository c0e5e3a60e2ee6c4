"""
Configuration validation utilities.
"""
import os
import warnings
from typing import Optional

from .exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get optional environment variable.

    Empty values count as unset.

    :param key: Environment variable name
    :param default: Default value if not set
    :return: Environment variable value or default
    """
    value = os.getenv(key)

    if not value or not value.strip():
        return default

    if _is_placeholder(value):
        # Warn but don't fail for optional configs
        warnings.warn(
            f"{key} appears to be a placeholder. Using default or None.",
            UserWarning
        )
        return default

    return value.strip()


def parse_timeout(value: Optional[str], key: str) -> Optional[float]:
    """
    Parse a timeout in seconds.

    :param value: Raw value, None when unset
    :param key: Name of the setting (for error messages)
    :return: Positive float, or None when unset
    :raises: ConfigurationError if not a positive number
    """
    if value is None:
        return None

    try:
        timeout = float(value)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number of seconds, got: {value}")

    if timeout <= 0:
        raise ConfigurationError(f"{key} must be greater than zero, got: {value}")

    return timeout


def validate_log_level(level: str, key: str) -> str:
    """
    Validate a logging level name.

    :param level: Level name, any case
    :param key: Name of the setting (for error messages)
    :return: Upper-cased level name
    :raises: ConfigurationError if not a known level
    """
    normalized = level.upper()
    if normalized not in LOG_LEVELS:
        raise ConfigurationError(
            f"{key} must be one of {', '.join(LOG_LEVELS)}, got: {level}"
        )
    return normalized


def _is_placeholder(value: str) -> bool:
    """Check if value is a template placeholder such as "your-project-id" or "<region>"."""
    value_lower = value.lower()
    if value_lower.startswith(("your_", "your-")):
        return True
    if value_lower.startswith("<") and value_lower.endswith(">"):
        return True
    return value_lower in ("placeholder", "changeme")
