"""
Cluster State Models

Dataclass models for what kubectl, docker and the health probe report back.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from enum import Enum


class ReadinessState(Enum):
    """Convergence state of the primary workload."""

    PENDING = "pending"
    READY = "ready"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self != ReadinessState.PENDING


class ProbeResult(Enum):
    """Result of the external health probe."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ImageRef:
    """Container image reference."""

    name: str
    tag: str
    registry: Optional[str] = None

    @property
    def reference(self) -> str:
        if self.registry:
            return f"{self.registry}/{self.name}:{self.tag}"
        return f"{self.name}:{self.tag}"

    def __str__(self) -> str:
        return self.reference


@dataclass(frozen=True)
class ClusterEvent:
    """A single Kubernetes event."""

    type: str
    reason: str
    object: str
    message: str
    timestamp: str = ""

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "ClusterEvent":
        """Build from an item of `kubectl get events -o json`."""
        involved = item.get("involvedObject", {})
        kind = involved.get("kind", "")
        name = involved.get("name", "")
        timestamp = (
            item.get("lastTimestamp")
            or item.get("eventTime")
            or item.get("metadata", {}).get("creationTimestamp")
            or ""
        )
        return cls(
            type=item.get("type", ""),
            reason=item.get("reason", ""),
            object=f"{kind.lower()}/{name}" if kind else name,
            message=(item.get("message") or "").strip(),
            timestamp=timestamp,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "reason": self.reason,
            "object": self.object,
            "message": self.message,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class PodStatus:
    """Status of one pod."""

    name: str
    phase: str
    ready: bool = False
    restarts: int = 0
    node: Optional[str] = None
    ip: Optional[str] = None

    @property
    def is_running(self) -> bool:
        return self.phase == "Running"

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "PodStatus":
        """Build from an item of `kubectl get pods -o json`."""
        status = item.get("status", {})
        containers = status.get("containerStatuses") or []
        return cls(
            name=item.get("metadata", {}).get("name", ""),
            phase=status.get("phase", "Unknown"),
            ready=bool(containers) and all(c.get("ready") for c in containers),
            restarts=sum(c.get("restartCount", 0) for c in containers),
            node=item.get("spec", {}).get("nodeName"),
            ip=status.get("podIP"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "phase": self.phase,
            "ready": self.ready,
            "restarts": self.restarts,
            "node": self.node,
            "ip": self.ip,
        }


@dataclass
class VerificationSummary:
    """Best-effort post-deploy health summary."""

    running_pods: int = 0
    total_pods: int = 0
    endpoints: Optional[int] = None
    probe: ProbeResult = ProbeResult.UNAVAILABLE
    warnings: List[str] = field(default_factory=list)
    pods: List[PodStatus] = field(default_factory=list)

    @property
    def service_present(self) -> bool:
        return self.endpoints is not None

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "running_pods": self.running_pods,
            "total_pods": self.total_pods,
            "endpoints": self.endpoints,
            "probe": self.probe.value,
            "warnings": list(self.warnings),
            "pods": [pod.to_dict() for pod in self.pods],
        }

    def __repr__(self) -> str:
        return (
            f"VerificationSummary(running={self.running_pods}, "
            f"endpoints={self.endpoints}, probe={self.probe.value})"
        )
