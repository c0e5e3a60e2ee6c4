"""
Compute Engine resource access.

Wraps the ``google-cloud-compute`` clients behind a scope-bound, read-only
ResourceClient that returns the package's own models.
"""
from .clients import ComputeClients, create_compute_clients
from .resource_client import (
    ResourceClient,
    GlobalResourceClient,
    RegionalResourceClient,
    resource_client_for_scope,
)

__all__ = [
    "ComputeClients",
    "create_compute_clients",
    "ResourceClient",
    "GlobalResourceClient",
    "RegionalResourceClient",
    "resource_client_for_scope",
]
