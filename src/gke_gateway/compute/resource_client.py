"""
Scope-bound, read-only access to the Compute resources a Gateway is built from.

A resource client is bound to one scope when it is created, so a single
resolution can never mix regional and global lookups.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterator, Optional, Union

from google.api_core.exceptions import NotFound
from google.cloud import compute_v1

from ..exceptions import ScopeNotFoundError
from ..models import BackendService, ForwardingRule, TargetHttpsProxy, UrlMap
from ..schemas import Scope
from .clients import ComputeClients
from .converters import (
    backend_service_from_proto,
    forwarding_rule_from_proto,
    target_https_proxy_from_proto,
    url_map_from_proto,
)

logger = logging.getLogger(__name__)

# Either a fixed timeout or a callable evaluated before each page request.
PageTimeout = Union[None, float, Callable[[], Optional[float]]]


def _call_options(timeout: Optional[float]) -> Dict[str, Any]:
    # Retries are disabled; errors surface to the caller immediately.
    options: Dict[str, Any] = {"retry": None}
    if timeout is not None:
        options["timeout"] = timeout
    return options


class ResourceClient(ABC):
    """Read-only accessors for one scope."""

    def __init__(self, clients: ComputeClients, scope: Scope):
        self._clients = clients
        self.scope = scope

    def list_forwarding_rules(self, timeout: PageTimeout = None) -> Iterator[ForwardingRule]:
        """
        Lazily iterate the scope's forwarding rules, page by page.

        Each page is a separate request. When ``timeout`` is callable it is
        called before every page request, so a caller-side deadline can
        shrink the timeout or abort between pages.

        :param timeout: Per-request timeout in seconds, or a callable returning one
        :raises ScopeNotFoundError: If the API answers 404 for the scope
        """
        page_token = ""
        try:
            while True:
                page_timeout = timeout() if callable(timeout) else timeout
                pager = self._list_forwarding_rules(page_token, _call_options(page_timeout))
                # Only the first response is taken; the pager would reuse
                # the same timeout for every following page.
                page = next(iter(pager.pages))
                for rule in page.items:
                    yield forwarding_rule_from_proto(rule)

                page_token = page.next_page_token
                if not page_token:
                    return
                logger.debug(f"Fetching next page of forwarding rules for {self.scope}")
        except NotFound as e:
            logger.debug(f"Forwarding rules not found for {self.scope}: {e}")
            raise ScopeNotFoundError(str(self.scope)) from e

    def get_target_https_proxy(self, name: str, timeout: Optional[float] = None) -> TargetHttpsProxy:
        return target_https_proxy_from_proto(self._get_target_https_proxy(name, _call_options(timeout)))

    def get_url_map(self, name: str, timeout: Optional[float] = None) -> UrlMap:
        return url_map_from_proto(self._get_url_map(name, _call_options(timeout)))

    def get_backend_service(self, name: str, timeout: Optional[float] = None) -> BackendService:
        return backend_service_from_proto(self._get_backend_service(name, _call_options(timeout)))

    @abstractmethod
    def _list_forwarding_rules(self, page_token: str, options: Dict[str, Any]) -> Any:
        """Issue one list request; returns the GAPIC pager for it."""
        pass

    @abstractmethod
    def _get_target_https_proxy(self, name: str, options: Dict[str, Any]) -> compute_v1.TargetHttpsProxy:
        pass

    @abstractmethod
    def _get_url_map(self, name: str, options: Dict[str, Any]) -> compute_v1.UrlMap:
        pass

    @abstractmethod
    def _get_backend_service(self, name: str, options: Dict[str, Any]) -> compute_v1.BackendService:
        pass


class GlobalResourceClient(ResourceClient):
    """Resource client for global load balancers."""

    def _list_forwarding_rules(self, page_token, options):
        return self._clients.global_forwarding_rules.list(
            request=compute_v1.ListGlobalForwardingRulesRequest(
                project=self.scope.project,
                page_token=page_token,
            ),
            **options,
        )

    def _get_target_https_proxy(self, name, options):
        return self._clients.target_https_proxies.get(
            request=compute_v1.GetTargetHttpsProxyRequest(
                project=self.scope.project,
                target_https_proxy=name,
            ),
            **options,
        )

    def _get_url_map(self, name, options):
        return self._clients.url_maps.get(
            request=compute_v1.GetUrlMapRequest(project=self.scope.project, url_map=name),
            **options,
        )

    def _get_backend_service(self, name, options):
        return self._clients.backend_services.get(
            request=compute_v1.GetBackendServiceRequest(
                project=self.scope.project,
                backend_service=name,
            ),
            **options,
        )


class RegionalResourceClient(ResourceClient):
    """Resource client for regional load balancers."""

    def _list_forwarding_rules(self, page_token, options):
        return self._clients.forwarding_rules.list(
            request=compute_v1.ListForwardingRulesRequest(
                project=self.scope.project,
                region=self.scope.region,
                page_token=page_token,
            ),
            **options,
        )

    def _get_target_https_proxy(self, name, options):
        return self._clients.region_target_https_proxies.get(
            request=compute_v1.GetRegionTargetHttpsProxyRequest(
                project=self.scope.project,
                region=self.scope.region,
                target_https_proxy=name,
            ),
            **options,
        )

    def _get_url_map(self, name, options):
        return self._clients.region_url_maps.get(
            request=compute_v1.GetRegionUrlMapRequest(
                project=self.scope.project,
                region=self.scope.region,
                url_map=name,
            ),
            **options,
        )

    def _get_backend_service(self, name, options):
        return self._clients.region_backend_services.get(
            request=compute_v1.GetRegionBackendServiceRequest(
                project=self.scope.project,
                region=self.scope.region,
                backend_service=name,
            ),
            **options,
        )


def resource_client_for_scope(clients: ComputeClients, scope: Scope) -> ResourceClient:
    """Pick the regional or global client variant for a scope."""
    if scope.is_regional:
        return RegionalResourceClient(clients, scope)
    return GlobalResourceClient(clients, scope)
