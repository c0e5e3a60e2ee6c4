"""
Compute Engine API client handles.

The handles are created once per process and shared by every lookup. They
are read-only and safe to use from several threads.
"""
import logging
from dataclasses import dataclass

from google.auth.exceptions import DefaultCredentialsError
from google.cloud import compute_v1

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComputeClients:
    """Global and regional client pairs for the four resource kinds."""
    global_forwarding_rules: compute_v1.GlobalForwardingRulesClient
    forwarding_rules: compute_v1.ForwardingRulesClient
    target_https_proxies: compute_v1.TargetHttpsProxiesClient
    region_target_https_proxies: compute_v1.RegionTargetHttpsProxiesClient
    url_maps: compute_v1.UrlMapsClient
    region_url_maps: compute_v1.RegionUrlMapsClient
    backend_services: compute_v1.BackendServicesClient
    region_backend_services: compute_v1.RegionBackendServicesClient


def create_compute_clients() -> ComputeClients:
    """
    Create REST clients using application default credentials.

    :return: ComputeClients bundle
    :raises ConfigurationError: If credentials cannot be found
    """
    try:
        clients = ComputeClients(
            global_forwarding_rules=compute_v1.GlobalForwardingRulesClient(),
            forwarding_rules=compute_v1.ForwardingRulesClient(),
            target_https_proxies=compute_v1.TargetHttpsProxiesClient(),
            region_target_https_proxies=compute_v1.RegionTargetHttpsProxiesClient(),
            url_maps=compute_v1.UrlMapsClient(),
            region_url_maps=compute_v1.RegionUrlMapsClient(),
            backend_services=compute_v1.BackendServicesClient(),
            region_backend_services=compute_v1.RegionBackendServicesClient(),
        )
    except DefaultCredentialsError as e:
        raise ConfigurationError(f"Unable to set up Google Compute clients: {e}") from e

    logger.debug("Compute Engine clients created")
    return clients
