"""
Factory for creating chain resolvers.
"""
from functools import partial
from typing import Optional

from ..compute import ComputeClients, create_compute_clients, resource_client_for_scope
from .chain_resolver import ChainResolver


def create_chain_resolver(clients: Optional[ComputeClients] = None) -> ChainResolver:
    """
    Factory function to create a ChainResolver backed by Compute Engine.

    Creates the API clients if they are not provided.

    :param clients: Optional pre-built ComputeClients
    :return: ChainResolver
    :raises ConfigurationError: If clients must be created and credentials are missing
    """
    if clients is None:
        clients = create_compute_clients()

    return ChainResolver(partial(resource_client_for_scope, clients))
