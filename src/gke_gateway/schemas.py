from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Scope:
    """Project plus optional region. No region means global resources."""
    project: str
    region: Optional[str] = None

    @property
    def is_regional(self) -> bool:
        return self.region is not None

    def __str__(self) -> str:
        if self.is_regional:
            return f"projects/{self.project}/regions/{self.region}"
        return f"projects/{self.project}/global"


@dataclass(frozen=True)
class ResolutionRequest:
    gateway: str
    namespace: str
    project: str
    region: Optional[str] = None
    timeout: Optional[float] = None

    @property
    def scope(self) -> Scope:
        return Scope(project=self.project, region=self.region)


@dataclass(frozen=True)
class ResolvedBackendService:
    id: str
    name: str


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    summary: str
    detail: str = ""


@dataclass
class ResolutionResponse:
    resolved: Optional[ResolvedBackendService] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def has_error(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        backend_service = None
        if self.resolved is not None:
            backend_service = {"id": self.resolved.id, "name": self.resolved.name}

        return {
            "backend_service": backend_service,
            "diagnostics": [
                {
                    "severity": d.severity.value,
                    "summary": d.summary,
                    "detail": d.detail,
                }
                for d in self.diagnostics
            ],
        }
