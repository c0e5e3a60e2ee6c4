from typing import Optional

from .schemas import Diagnostic, Severity


class GatewayResolverError(Exception):
    """Base exception for the gateway resolver."""


class ConfigurationError(GatewayResolverError):
    """Raised when configuration or client setup is invalid."""


class ScopeNotFoundError(GatewayResolverError):
    """Raised when a project or region has never had the resource kind provisioned."""


class ResolutionError(GatewayResolverError):
    """
    Base for failures reported back to the caller as a diagnostic.

    :param summary: Short, user-facing summary
    :param detail: Longer explanation
    """

    def __init__(self, summary: str, detail: str = ""):
        self.summary = summary
        self.detail = detail
        super().__init__(f"{summary}: {detail}" if detail else summary)

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            severity=Severity.ERROR,
            summary=self.summary,
            detail=self.detail,
        )


class RequestValidationError(ResolutionError):
    """Raised when a lookup request is missing required fields."""


class AmbiguousMatchError(ResolutionError):
    """Raised when more than one candidate survives a fan-out."""


class UnsupportedTargetError(ResolutionError):
    """Raised when a forwarding rule targets an unsupported proxy kind."""

    def __init__(self, rule_name: str, kind: str):
        self.rule_name = rule_name
        self.kind = kind
        super().__init__(
            "Unsupported target type for forwarding rule",
            f"The {rule_name} forwarding rule has a target with a type of {kind} "
            f"which is currently unsupported.",
        )


class LookupFailedError(ResolutionError):
    """Raised when a cloud API call fails."""

    def __init__(self, operation: str, cause: Exception, summary: Optional[str] = None):
        self.operation = operation
        self.cause = cause
        super().__init__(
            summary or f"Error looking up {operation}",
            f"Error calling Google API: {cause}",
        )
