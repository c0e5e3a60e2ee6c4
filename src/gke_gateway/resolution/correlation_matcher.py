"""
Correlation between forwarding rules and Kubernetes Gateway resources.

GKE writes a JSON description onto the forwarding rules it creates for a
Gateway. The ``k8sResource`` field of that description names the Gateway as
``/namespaces/{namespace}/gateways/{gateway}``.
"""
import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class ForwardingRuleDescription(BaseModel):
    """Structured forwarding rule description. Every field is optional."""

    model_config = ConfigDict(extra="ignore")

    k8s_resource: Optional[str] = Field(default=None, alias="k8sResource")


def correlation_key(namespace: str, gateway: str) -> str:
    """Build the ``k8sResource`` value GKE records for a Gateway."""
    return f"/namespaces/{namespace}/gateways/{gateway}"


def parse_description(description: str) -> Optional[ForwardingRuleDescription]:
    """
    Decode a forwarding rule description.

    :param description: Raw description string
    :return: Decoded description, or None when it is not structured data
    """
    try:
        return ForwardingRuleDescription.model_validate_json(description)
    except ValidationError:
        return None


class CorrelationMatcher:
    """
    Decides whether a forwarding rule belongs to a namespace/gateway pair.

    Matching is exact and case-sensitive. Most forwarding rules carry free-text
    or empty descriptions; those are non-matches, never errors.
    """

    def __init__(self, namespace: str, gateway: str):
        """
        :param namespace: Kubernetes namespace of the Gateway
        :param gateway: Name of the Gateway resource
        """
        self.key = correlation_key(namespace, gateway)

    def matches(self, description: str) -> bool:
        """
        Check a raw description against the correlation key.

        :param description: Raw forwarding rule description
        :return: True only when ``k8sResource`` equals the key exactly
        """
        decoded = parse_description(description)
        if decoded is None or decoded.k8s_resource is None:
            return False

        matched = decoded.k8s_resource == self.key
        if not matched:
            logger.debug(f"Description k8sResource '{decoded.k8s_resource}' does not match '{self.key}'")
        return matched
