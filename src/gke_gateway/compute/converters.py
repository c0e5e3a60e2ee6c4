"""
Conversion from ``compute_v1`` proto messages to the package's models.

Compute fields are proto3 ``optional``; presence is tested with ``in`` so
that an unset field maps to None rather than an empty default.
"""
from typing import Any, Optional

from google.cloud import compute_v1

from ..models import (
    BackendService,
    ForwardingRule,
    HttpRouteAction,
    PathMatcher,
    RouteRule,
    TargetHttpsProxy,
    UrlMap,
    WeightedBackendService,
)


def _optional(message: Any, field_name: str) -> Optional[Any]:
    if field_name in message:
        return getattr(message, field_name)
    return None


def forwarding_rule_from_proto(rule: compute_v1.ForwardingRule) -> ForwardingRule:
    return ForwardingRule(
        name=rule.name,
        description=rule.description,
        target=rule.target,
        id=_optional(rule, "id"),
    )


def target_https_proxy_from_proto(proxy: compute_v1.TargetHttpsProxy) -> TargetHttpsProxy:
    return TargetHttpsProxy(name=proxy.name, url_map=proxy.url_map)


def route_action_from_proto(
    action: Optional[compute_v1.HttpRouteAction],
) -> Optional[HttpRouteAction]:
    if action is None:
        return None

    return HttpRouteAction(
        weighted_backend_services=[
            WeightedBackendService(
                backend_service=wbs.backend_service,
                weight=_optional(wbs, "weight"),
            )
            for wbs in action.weighted_backend_services
        ],
        has_fault_injection_policy="fault_injection_policy" in action,
    )


def url_map_from_proto(url_map: compute_v1.UrlMap) -> UrlMap:
    path_matchers = []
    for matcher in url_map.path_matchers:
        path_matchers.append(
            PathMatcher(
                name=matcher.name,
                default_service=_optional(matcher, "default_service"),
                default_route_action=route_action_from_proto(
                    _optional(matcher, "default_route_action")
                ),
                route_rules=[
                    RouteRule(
                        priority=_optional(rule, "priority"),
                        route_action=route_action_from_proto(_optional(rule, "route_action")),
                    )
                    for rule in matcher.route_rules
                ],
            )
        )

    return UrlMap(
        name=url_map.name,
        default_service=_optional(url_map, "default_service"),
        default_route_action=route_action_from_proto(
            _optional(url_map, "default_route_action")
        ),
        path_matchers=path_matchers,
    )


def backend_service_from_proto(service: compute_v1.BackendService) -> BackendService:
    return BackendService(id=service.id, name=service.name)
