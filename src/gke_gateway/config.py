from dataclasses import dataclass
from typing import Optional


@dataclass
class GatewayResolverConfig:
    # Provider-level defaults, overridden per lookup
    project: Optional[str] = None
    region: Optional[str] = None

    # Overall deadline for one lookup, in seconds
    request_timeout: Optional[float] = None

    # Logging
    log_level: str = "INFO"
