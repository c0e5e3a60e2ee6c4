"""
Backend service candidate extraction from URL maps.
"""
from typing import List, Optional

from ..models import HttpRouteAction, UrlMap


class BackendServiceCandidateExtractor:
    """
    Collects every backend service path a URL map can route real traffic to.

    Order of the result:
    1. the URL map's default service
    2. each path matcher's default service
    3. weighted backend services of the route actions, taken from the URL
       map's default route action, then per path matcher its default route
       action followed by its route rules' actions

    Route actions with a fault injection policy are skipped. They answer
    with synthetic responses and never reach a backend.
    """

    def extract(self, url_map: UrlMap) -> List[str]:
        """
        :param url_map: URL map to traverse
        :return: Backend service paths in encounter order, duplicates kept
        """
        paths: List[str] = []
        route_actions: List[Optional[HttpRouteAction]] = [url_map.default_route_action]

        if url_map.default_service is not None:
            paths.append(url_map.default_service)

        for matcher in url_map.path_matchers:
            route_actions.append(matcher.default_route_action)

            if matcher.default_service is not None:
                paths.append(matcher.default_service)

            for rule in matcher.route_rules:
                route_actions.append(rule.route_action)

        for action in route_actions:
            if action is None or action.has_fault_injection_policy:
                continue

            for weighted in action.weighted_backend_services:
                paths.append(weighted.backend_service)

        return paths
