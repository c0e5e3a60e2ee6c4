"""
Resolution of Kubernetes Gateways to the backend services GKE created for them.

Key components:
- CorrelationMatcher: matches forwarding rule descriptions to a Gateway
- AmbiguityPolicy: exactly-one-of-N selection at each fan-out
- BackendServiceCandidateExtractor: URL map traversal
- ChainResolver: the forwarding rule -> proxy -> URL map -> backend service chain
"""
from .correlation_matcher import CorrelationMatcher, ForwardingRuleDescription, correlation_key
from .resolution_policy import AmbiguityPolicy
from .candidate_extractor import BackendServiceCandidateExtractor
from .chain_resolver import ChainResolver, ResolutionStage
from .resolver_factory import create_chain_resolver

__all__ = [
    "CorrelationMatcher",
    "ForwardingRuleDescription",
    "correlation_key",
    "AmbiguityPolicy",
    "BackendServiceCandidateExtractor",
    "ChainResolver",
    "ResolutionStage",
    "create_chain_resolver",
]
