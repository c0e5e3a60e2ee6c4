"""
Lookup of the Google Cloud backend service behind a GKE Kubernetes Gateway.

Public API:
    config = load_config_from_env()
    service = GatewayResolverService(config)
    response = service.lookup(gateway="my-gateway-name", namespace="my-cool-app")
"""
from .config import GatewayResolverConfig
from .config_loader import load_config_from_env
from .schemas import (
    Diagnostic,
    ResolutionRequest,
    ResolutionResponse,
    ResolvedBackendService,
    Scope,
    Severity,
)
from .service import GatewayResolverService

__all__ = [
    "GatewayResolverConfig",
    "load_config_from_env",
    "Diagnostic",
    "ResolutionRequest",
    "ResolutionResponse",
    "ResolvedBackendService",
    "Scope",
    "Severity",
    "GatewayResolverService",
]
