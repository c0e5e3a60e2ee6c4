from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ForwardingRule:
    name: str
    description: str
    target: str
    id: Optional[int] = None


@dataclass(frozen=True)
class TargetHttpsProxy:
    name: str
    url_map: str


@dataclass(frozen=True)
class WeightedBackendService:
    backend_service: str
    weight: Optional[int] = None


@dataclass(frozen=True)
class HttpRouteAction:
    weighted_backend_services: List[WeightedBackendService] = field(default_factory=list)
    has_fault_injection_policy: bool = False


@dataclass(frozen=True)
class RouteRule:
    priority: Optional[int] = None
    route_action: Optional[HttpRouteAction] = None


@dataclass(frozen=True)
class PathMatcher:
    name: str
    default_service: Optional[str] = None
    default_route_action: Optional[HttpRouteAction] = None
    route_rules: List[RouteRule] = field(default_factory=list)


@dataclass(frozen=True)
class UrlMap:
    name: str
    default_service: Optional[str] = None
    default_route_action: Optional[HttpRouteAction] = None
    path_matchers: List[PathMatcher] = field(default_factory=list)


@dataclass(frozen=True)
class BackendService:
    id: int
    name: str
