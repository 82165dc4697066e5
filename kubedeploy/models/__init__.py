"""
kubedeploy Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .results import (
    OutcomeStatus,
    OperationOutcome,
    StageReport,
    ExecutionResult,
)
from .cluster import (
    ReadinessState,
    ProbeResult,
    ImageRef,
    ClusterEvent,
    PodStatus,
    VerificationSummary,
)
from .resources import (
    ResourceDescriptor,
    ResourceSet,
    DEFAULT_RESOURCES,
)
from .context import DeploymentContext

__all__ = [
    # Results
    "OutcomeStatus",
    "OperationOutcome",
    "StageReport",
    "ExecutionResult",
    # Cluster
    "ReadinessState",
    "ProbeResult",
    "ImageRef",
    "ClusterEvent",
    "PodStatus",
    "VerificationSummary",
    # Resources
    "ResourceDescriptor",
    "ResourceSet",
    "DEFAULT_RESOURCES",
    # Context
    "DeploymentContext",
]
