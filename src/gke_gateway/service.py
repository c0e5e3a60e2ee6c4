import logging
from typing import Optional

from .config import GatewayResolverConfig
from .exceptions import RequestValidationError
from .resolution import ChainResolver, create_chain_resolver
from .schemas import ResolutionRequest, ResolutionResponse

logger = logging.getLogger(__name__)


class GatewayResolverService:
    """
    Facade over the resolution subsystem.
    The ONLY entry point for the CLI and other callers.
    """

    def __init__(
        self,
        config: GatewayResolverConfig,
        resolver: Optional[ChainResolver] = None,
    ):
        """
        Composition root.

        :param config: Provider-level defaults
        :param resolver: Optional resolver; one backed by Compute Engine is created if omitted
        :raises ConfigurationError: If the Compute clients cannot be created
        """
        self.config = config
        self._resolver = resolver or create_chain_resolver()

    # ----------------------------
    # Request handling
    # ----------------------------
    def build_request(
        self,
        gateway: Optional[str],
        namespace: Optional[str],
        project: Optional[str] = None,
        region: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> ResolutionRequest:
        """
        Merge per-lookup arguments with the configured defaults.

        Per-lookup project, region and timeout take precedence.

        :raises RequestValidationError: If a required field is missing
        """
        if not gateway:
            raise RequestValidationError("Missing gateway", "The gateway field is required.")

        if not namespace:
            raise RequestValidationError("Missing namespace", "The namespace field is required.")

        project = project or self.config.project
        if not project:
            raise RequestValidationError(
                "Missing project",
                "The project field must be set on either the provider or data source.",
            )

        return ResolutionRequest(
            gateway=gateway,
            namespace=namespace,
            project=project,
            region=region or self.config.region,
            timeout=timeout if timeout is not None else self.config.request_timeout,
        )

    def lookup(
        self,
        gateway: Optional[str],
        namespace: Optional[str],
        project: Optional[str] = None,
        region: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> ResolutionResponse:
        """
        Find the backend service GKE created for a Gateway.

        :return: ResolutionResponse; validation problems come back as diagnostics
        """
        try:
            request = self.build_request(gateway, namespace, project, region, timeout)
        except RequestValidationError as e:
            logger.warning(f"Invalid lookup request: {e}")
            return ResolutionResponse(diagnostics=[e.to_diagnostic()])

        logger.debug(f"Looking up gateway {request.namespace}/{request.gateway} in {request.scope}")
        return self._resolver.resolve(request)
