"""
Tests for the Compute Engine resource client adapters.
"""
from unittest.mock import Mock

import pytest
from google.api_core.exceptions import NotFound
from google.cloud import compute_v1

from gke_gateway.compute import (
    ComputeClients,
    GlobalResourceClient,
    RegionalResourceClient,
    resource_client_for_scope,
)
from gke_gateway.compute.converters import route_action_from_proto, url_map_from_proto
from gke_gateway.exceptions import ScopeNotFoundError
from gke_gateway.resolution import create_chain_resolver
from gke_gateway.schemas import ResolutionRequest, Scope

GLOBAL_ATTRS = ("global_forwarding_rules", "target_https_proxies", "url_maps", "backend_services")
REGIONAL_ATTRS = (
    "forwarding_rules",
    "region_target_https_proxies",
    "region_url_maps",
    "region_backend_services",
)


def _pager(rules, next_page_token=""):
    """Stand-in for a GAPIC list pager serving a single response."""
    return Mock(pages=[compute_v1.ForwardingRuleList(items=rules, next_page_token=next_page_token)])


@pytest.fixture
def clients():
    """ComputeClients bundle made of mocks that serve one resolvable chain."""
    mocks = {name: Mock(name=name) for name in GLOBAL_ATTRS + REGIONAL_ATTRS}
    rule = compute_v1.ForwardingRule(
        name="fr-1",
        id=42,
        description='{"k8sResource":"/namespaces/my-cool-app/gateways/my-gateway-name"}',
        target="https://www.googleapis.com/compute/v1/projects/p/global/targetHttpsProxies/proxy-1",
    )
    proxy = compute_v1.TargetHttpsProxy(
        name="proxy-1",
        url_map="https://www.googleapis.com/compute/v1/projects/p/global/urlMaps/map-1",
    )
    url_map = compute_v1.UrlMap(
        name="map-1",
        default_service="https://www.googleapis.com/compute/v1/projects/p/global/backendServices/svc-1",
    )
    service = compute_v1.BackendService(id=9876543210, name="svc-1")

    for name in ("global_forwarding_rules", "forwarding_rules"):
        mocks[name].list.return_value = _pager([rule])
    for name in ("target_https_proxies", "region_target_https_proxies"):
        mocks[name].get.return_value = proxy
    for name in ("url_maps", "region_url_maps"):
        mocks[name].get.return_value = url_map
    for name in ("backend_services", "region_backend_services"):
        mocks[name].get.return_value = service

    return ComputeClients(**mocks)


def _used(clients, attrs):
    return [name for name in attrs if getattr(clients, name).method_calls]


class TestScopeSelection:
    """Tests that lookups never mix regional and global clients."""

    def test_scope_picks_client_variant(self, clients):
        """Test that region presence picks the client class."""
        assert isinstance(resource_client_for_scope(clients, Scope("p")), GlobalResourceClient)
        assert isinstance(
            resource_client_for_scope(clients, Scope("p", "us-central1")),
            RegionalResourceClient,
        )

    def test_global_request_uses_only_global_clients(self, clients):
        """Test that a global resolution touches only global clients."""
        resolver = create_chain_resolver(clients)

        response = resolver.resolve(
            ResolutionRequest(gateway="my-gateway-name", namespace="my-cool-app", project="p")
        )

        assert response.resolved.name == "svc-1"
        assert response.resolved.id == "9876543210"
        assert _used(clients, GLOBAL_ATTRS) == list(GLOBAL_ATTRS)
        assert _used(clients, REGIONAL_ATTRS) == []

    def test_regional_request_uses_only_regional_clients(self, clients):
        """Test that a regional resolution touches only regional clients."""
        resolver = create_chain_resolver(clients)

        response = resolver.resolve(
            ResolutionRequest(
                gateway="my-gateway-name",
                namespace="my-cool-app",
                project="p",
                region="us-central1",
            )
        )

        assert response.resolved.name == "svc-1"
        assert _used(clients, REGIONAL_ATTRS) == list(REGIONAL_ATTRS)
        assert _used(clients, GLOBAL_ATTRS) == []


class TestRequests:
    """Tests for the requests sent to the API."""

    def test_regional_requests_carry_region(self, clients):
        """Test that regional requests name project, region and resource."""
        client = RegionalResourceClient(clients, Scope("p", "europe-west1"))

        list(client.list_forwarding_rules())
        client.get_url_map("map-1")

        list_request = clients.forwarding_rules.list.call_args.kwargs["request"]
        assert list_request.project == "p"
        assert list_request.region == "europe-west1"
        get_request = clients.region_url_maps.get.call_args.kwargs["request"]
        assert get_request.url_map == "map-1"
        assert get_request.region == "europe-west1"

    def test_retries_disabled_and_timeout_forwarded(self, clients):
        """Test that calls never retry and pass the timeout through."""
        client = GlobalResourceClient(clients, Scope("p"))

        client.get_backend_service("svc-1", timeout=2.5)

        kwargs = clients.backend_services.get.call_args.kwargs
        assert kwargs["retry"] is None
        assert kwargs["timeout"] == 2.5
        assert kwargs["request"].backend_service == "svc-1"

    def test_timeout_omitted_when_unset(self, clients):
        """Test that no timeout is sent when the caller has none."""
        client = GlobalResourceClient(clients, Scope("p"))

        client.get_target_https_proxy("proxy-1")

        assert "timeout" not in clients.target_https_proxies.get.call_args.kwargs


class TestListForwardingRules:
    """Tests for forwarding rule listing."""

    def test_rules_are_converted(self, clients):
        """Test that listed rules come back as models."""
        client = GlobalResourceClient(clients, Scope("p"))

        rules = list(client.list_forwarding_rules())

        assert [r.name for r in rules] == ["fr-1"]
        assert rules[0].id == 42
        assert rules[0].target.endswith("/targetHttpsProxies/proxy-1")

    def test_listing_is_lazy(self, clients):
        """Test that no API call happens until iteration starts."""
        client = GlobalResourceClient(clients, Scope("p"))

        rules = client.list_forwarding_rules()

        clients.global_forwarding_rules.list.assert_not_called()
        next(rules)
        clients.global_forwarding_rules.list.assert_called_once()

    def test_not_found_signals_missing_scope(self, clients):
        """Test that a 404 while listing becomes ScopeNotFoundError."""
        clients.global_forwarding_rules.list.side_effect = NotFound("project not found")
        client = GlobalResourceClient(clients, Scope("p"))

        with pytest.raises(ScopeNotFoundError):
            list(client.list_forwarding_rules())

    def test_follows_page_tokens(self, clients):
        """Test that every page is requested with the previous page's token."""
        clients.global_forwarding_rules.list.side_effect = [
            _pager([compute_v1.ForwardingRule(name="fr-1")], next_page_token="page-2"),
            _pager([compute_v1.ForwardingRule(name="fr-2")]),
        ]
        client = GlobalResourceClient(clients, Scope("p"))

        rules = list(client.list_forwarding_rules())

        assert [r.name for r in rules] == ["fr-1", "fr-2"]
        requests = [c.kwargs["request"] for c in clients.global_forwarding_rules.list.call_args_list]
        assert [r.page_token for r in requests] == ["", "page-2"]

    def test_timeout_callable_is_evaluated_per_page(self, clients):
        """Test that each page request gets a freshly computed timeout."""
        clients.forwarding_rules.list.side_effect = [
            _pager([compute_v1.ForwardingRule(name="fr-1")], next_page_token="page-2"),
            _pager([compute_v1.ForwardingRule(name="fr-2")]),
        ]
        timeouts = iter([9.0, 4.0])
        client = RegionalResourceClient(clients, Scope("p", "us-central1"))

        list(client.list_forwarding_rules(timeout=lambda: next(timeouts)))

        sent = [c.kwargs["timeout"] for c in clients.forwarding_rules.list.call_args_list]
        assert sent == [9.0, 4.0]
        assert all(c.kwargs["retry"] is None for c in clients.forwarding_rules.list.call_args_list)

    def test_timeout_callable_error_stops_paging(self, clients):
        """Test that an error raised by the timeout callable aborts before the next page."""
        clients.global_forwarding_rules.list.side_effect = [
            _pager([compute_v1.ForwardingRule(name="fr-1")], next_page_token="page-2"),
        ]
        calls = []

        def timeout():
            calls.append(1)
            if len(calls) > 1:
                raise TimeoutError("out of time")
            return 5.0

        client = GlobalResourceClient(clients, Scope("p"))

        with pytest.raises(TimeoutError):
            list(client.list_forwarding_rules(timeout=timeout))

        clients.global_forwarding_rules.list.assert_called_once()


class TestConverters:
    """Tests for proto-to-model conversion."""

    def test_unset_fields_map_to_none(self):
        """Test that unset optional fields are None, not empty strings."""
        url_map = url_map_from_proto(compute_v1.UrlMap(name="map-1"))

        assert url_map.default_service is None
        assert url_map.default_route_action is None
        assert url_map.path_matchers == []

    def test_nested_url_map(self):
        """Test conversion of path matchers, route rules and weighted services."""
        proto = compute_v1.UrlMap(
            name="map-1",
            path_matchers=[
                compute_v1.PathMatcher(
                    name="pm-1",
                    default_service="bs/svc-1",
                    route_rules=[
                        compute_v1.HttpRouteRule(
                            priority=10,
                            route_action=compute_v1.HttpRouteAction(
                                weighted_backend_services=[
                                    compute_v1.WeightedBackendService(backend_service="bs/svc-2", weight=70),
                                    compute_v1.WeightedBackendService(backend_service="bs/svc-3", weight=30),
                                ]
                            ),
                        ),
                        compute_v1.HttpRouteRule(priority=20),
                    ],
                )
            ],
        )

        url_map = url_map_from_proto(proto)

        matcher = url_map.path_matchers[0]
        assert matcher.default_service == "bs/svc-1"
        assert matcher.default_route_action is None
        assert matcher.route_rules[0].priority == 10
        assert [w.backend_service for w in matcher.route_rules[0].route_action.weighted_backend_services] == [
            "bs/svc-2",
            "bs/svc-3",
        ]
        assert matcher.route_rules[0].route_action.weighted_backend_services[0].weight == 70
        assert matcher.route_rules[1].route_action is None

    def test_fault_injection_presence(self):
        """Test that a configured fault injection policy is detected."""
        faulty = compute_v1.HttpRouteAction(
            fault_injection_policy=compute_v1.HttpFaultInjection(
                abort=compute_v1.HttpFaultAbort(http_status=503, percentage=100.0)
            ),
            weighted_backend_services=[compute_v1.WeightedBackendService(backend_service="bs/svc-1")],
        )
        plain = compute_v1.HttpRouteAction(
            weighted_backend_services=[compute_v1.WeightedBackendService(backend_service="bs/svc-1")],
        )

        assert route_action_from_proto(faulty).has_fault_injection_policy is True
        assert route_action_from_proto(plain).has_fault_injection_policy is False
