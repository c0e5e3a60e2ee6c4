"""
Multi-hop resolution of a Gateway's backend service.

Walks forwarding rule -> target HTTPS proxy -> URL map -> backend service,
narrowing to a single candidate at each fan-out.
"""
import logging
import time
from enum import Enum
from typing import Callable, List, Optional

from google.api_core.exceptions import DeadlineExceeded, GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from requests.exceptions import RequestException

from ..compute.resource_client import ResourceClient
from ..exceptions import (
    LookupFailedError,
    ResolutionError,
    ScopeNotFoundError,
    UnsupportedTargetError,
)
from ..models import ForwardingRule, TargetHttpsProxy, UrlMap
from ..schemas import ResolutionRequest, ResolutionResponse, ResolvedBackendService, Scope
from .candidate_extractor import BackendServiceCandidateExtractor
from .correlation_matcher import CorrelationMatcher
from .resolution_policy import AmbiguityPolicy
from .resource_path import resource_kind, resource_name

logger = logging.getLogger(__name__)

TARGET_HTTPS_PROXIES = "targetHttpsProxies"
LIST_FORWARDING_RULES_SUMMARY = "Unable to iterate over forwarding rules"

# API status errors, plus transport and credential failures the REST
# transport lets through unconverted.
LOOKUP_ERRORS = (GoogleAPIError, RequestException, GoogleAuthError)


class ResolutionStage(str, Enum):
    LOCATING_RULE = "locating_rule"
    RESOLVING_PROXY = "resolving_proxy"
    RESOLVING_MAP = "resolving_map"
    EXTRACTING_CANDIDATES = "extracting_candidates"
    RESOLVING_SERVICE = "resolving_service"


class _Deadline:
    """Absolute deadline checked before each blocking API call."""

    def __init__(self, timeout: Optional[float]):
        self._expires_at = None if timeout is None else time.monotonic() + timeout

    def remaining(self, operation: str, summary: Optional[str] = None) -> Optional[float]:
        if self._expires_at is None:
            return None

        remaining = self._expires_at - time.monotonic()
        if remaining <= 0:
            raise LookupFailedError(
                operation,
                DeadlineExceeded("Resolution deadline exceeded"),
                summary=summary,
            )
        return remaining


class ChainResolver:
    """
    Resolves the backend service behind a Kubernetes Gateway.

    Stages run strictly in order and the first failure stops the chain.
    A stage that finds nothing ends the chain with an empty, successful
    response.

    Usage:
        resolver = ChainResolver(partial(resource_client_for_scope, clients))
        response = resolver.resolve(ResolutionRequest(
            gateway="my-gateway-name",
            namespace="my-cool-app",
            project="my-gcp-project",
        ))
    """

    def __init__(self, client_for_scope: Callable[[Scope], ResourceClient]):
        """
        :param client_for_scope: Returns the resource client bound to a scope
        """
        self._client_for_scope = client_for_scope
        self._rule_policy = AmbiguityPolicy("forwarding rules")
        self._service_policy = AmbiguityPolicy(
            "backend services",
            summary="Multiple backend services found",
        )
        self._extractor = BackendServiceCandidateExtractor()

    def resolve(self, request: ResolutionRequest) -> ResolutionResponse:
        """
        Resolve a request into at most one backend service.

        :param request: Gateway, namespace and scope to resolve
        :return: Response with the resolved service, nothing, or one error diagnostic
        """
        client = self._client_for_scope(request.scope)
        deadline = _Deadline(request.timeout)

        try:
            resolved = self._resolve_chain(client, request, deadline)
        except ResolutionError as e:
            logger.warning(
                f"Resolution failed for gateway {request.namespace}/{request.gateway} "
                f"in {request.scope}: {e.summary}"
            )
            return ResolutionResponse(diagnostics=[e.to_diagnostic()])

        if resolved is None:
            logger.info(
                f"No backend service found for gateway {request.namespace}/{request.gateway} "
                f"in {request.scope}"
            )
            return ResolutionResponse()

        logger.info(
            f"Resolved gateway {request.namespace}/{request.gateway} to backend service {resolved.name}"
        )
        return ResolutionResponse(resolved=resolved)

    def _resolve_chain(
        self,
        client: ResourceClient,
        request: ResolutionRequest,
        deadline: _Deadline,
    ) -> Optional[ResolvedBackendService]:
        self._enter(ResolutionStage.LOCATING_RULE, request)
        rules = self._locate_forwarding_rules(client, request, deadline)
        rule = self._rule_policy.select(rules, lambda r: r.name)
        if rule is None:
            return None

        self._enter(ResolutionStage.RESOLVING_PROXY, request)
        proxy = self._resolve_proxy(client, rule, deadline)

        self._enter(ResolutionStage.RESOLVING_MAP, request)
        url_map = self._resolve_url_map(client, proxy, deadline)

        self._enter(ResolutionStage.EXTRACTING_CANDIDATES, request)
        paths = self._extractor.extract(url_map)
        logger.debug(f"URL map {url_map.name} backend service candidates: {paths}")
        path = self._service_policy.select(paths, resource_name)
        if path is None:
            return None

        self._enter(ResolutionStage.RESOLVING_SERVICE, request)
        return self._resolve_backend_service(client, path, deadline)

    def _enter(self, stage: ResolutionStage, request: ResolutionRequest) -> None:
        logger.debug(f"Gateway {request.namespace}/{request.gateway}: {stage.value}")

    def _locate_forwarding_rules(
        self,
        client: ResourceClient,
        request: ResolutionRequest,
        deadline: _Deadline,
    ) -> List[ForwardingRule]:
        """
        Collect every forwarding rule whose description names the Gateway.

        A scope that does not exist yields no rules. The deadline is checked
        again before every page request.
        """
        matcher = CorrelationMatcher(request.namespace, request.gateway)
        matching: List[ForwardingRule] = []

        def page_timeout() -> Optional[float]:
            return deadline.remaining("forwarding rules", summary=LIST_FORWARDING_RULES_SUMMARY)

        try:
            for rule in client.list_forwarding_rules(timeout=page_timeout):
                if matcher.matches(rule.description):
                    matching.append(rule)
        except ScopeNotFoundError:
            logger.info(f"Scope {client.scope} has no forwarding rules, treating as not found")
            return []
        except LOOKUP_ERRORS as e:
            raise LookupFailedError(
                "forwarding rules",
                e,
                summary=LIST_FORWARDING_RULES_SUMMARY,
            ) from e

        logger.debug(f"{len(matching)} forwarding rule(s) match {matcher.key}")
        return matching

    def _resolve_proxy(
        self,
        client: ResourceClient,
        rule: ForwardingRule,
        deadline: _Deadline,
    ) -> TargetHttpsProxy:
        kind = resource_kind(rule.target)
        if kind != TARGET_HTTPS_PROXIES:
            raise UnsupportedTargetError(rule.name, kind)

        name = resource_name(rule.target)
        operation = f"HTTPS target proxy {name}"
        try:
            return client.get_target_https_proxy(name, timeout=deadline.remaining(operation))
        except LOOKUP_ERRORS as e:
            raise LookupFailedError(operation, e) from e

    def _resolve_url_map(
        self,
        client: ResourceClient,
        proxy: TargetHttpsProxy,
        deadline: _Deadline,
    ) -> UrlMap:
        name = resource_name(proxy.url_map)
        operation = f"URL map {name}"
        try:
            return client.get_url_map(name, timeout=deadline.remaining(operation))
        except LOOKUP_ERRORS as e:
            raise LookupFailedError(operation, e) from e

    def _resolve_backend_service(
        self,
        client: ResourceClient,
        path: str,
        deadline: _Deadline,
    ) -> ResolvedBackendService:
        name = resource_name(path)
        operation = f"backend service {name}"
        try:
            service = client.get_backend_service(name, timeout=deadline.remaining(operation))
        except LOOKUP_ERRORS as e:
            raise LookupFailedError(operation, e) from e

        return ResolvedBackendService(id=str(service.id), name=service.name)
