"""
Configuration loader with validation.
"""
from dotenv import load_dotenv

from .config import GatewayResolverConfig
from .config_validator import get_optional_env, parse_timeout, validate_log_level


def load_config_from_env() -> GatewayResolverConfig:
    """
    Load configuration from environment variables with validation.

    Reads a .env file first when one exists (for local development).

    Usage:
        config = load_config_from_env()
        service = GatewayResolverService(config)

    :return: Validated GatewayResolverConfig instance
    :raises: ConfigurationError if a value is invalid
    """
    load_dotenv()

    return GatewayResolverConfig(
        project=get_optional_env(
            "GKE_GATEWAY_PROJECT",
            default=get_optional_env("GOOGLE_CLOUD_PROJECT"),
        ),
        region=get_optional_env("GKE_GATEWAY_REGION"),
        request_timeout=parse_timeout(
            get_optional_env("GKE_GATEWAY_TIMEOUT"),
            "GKE_GATEWAY_TIMEOUT",
        ),
        log_level=validate_log_level(
            get_optional_env("LOG_LEVEL", default="INFO"),
            "LOG_LEVEL",
        ),
    )
