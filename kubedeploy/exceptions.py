"""
kubedeploy Exception Hierarchy

Clean exception hierarchy for consistent error handling across the CLI.
Every error defined here is fatal for the running flow.
"""

from typing import Optional


class KubeDeployError(Exception):
    """Base exception for all kubedeploy errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message

    def to_dict(self) -> dict:
        """JSON error payload."""
        return {"error": self.message, "context": self.context}


class PrerequisiteError(KubeDeployError):
    """Raised when the local environment cannot run a deployment."""

    pass


class MissingToolError(PrerequisiteError):
    """Raised when a required binary is not installed or not in PATH."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(
            f"{tool} is not installed or not in PATH",
            context=f"Install {tool} or point the {tool.upper()} variable at it",
        )


class UnknownContextError(PrerequisiteError):
    """Raised when the requested Kubernetes context does not exist."""

    def __init__(self, context_name: str):
        self.context_name = context_name
        super().__init__(
            f"Kubernetes context '{context_name}' not found",
            context="Run: kubectl config get-contexts",
        )


class ImageError(KubeDeployError):
    """Raised when image operations fail."""

    pass


class BuildError(ImageError):
    """Raised when the image build fails."""

    pass


class PublishError(ImageError):
    """Raised when pushing the image to the registry fails."""

    pass


class ApplyError(KubeDeployError):
    """Raised when the cluster rejects a manifest."""

    def __init__(self, resource: str, stderr: str = ""):
        self.resource = resource
        self.stderr = stderr
        super().__init__(
            f"Failed to apply {resource}",
            context=stderr.strip() or None,
        )


class ConvergenceTimeoutError(KubeDeployError):
    """Raised when the workload does not become available in time."""

    def __init__(
        self,
        workload: str,
        timeout_seconds: int,
        events: Optional[list] = None,
        detail: str = "",
    ):
        self.workload = workload
        self.timeout_seconds = timeout_seconds
        self.events = events or []
        self.detail = detail
        lines = []
        if detail:
            lines.append(f"kubectl: {detail}")
        lines.append(
            f"{len(self.events)} recent event(s) shown above"
            if self.events
            else "No recent events recorded in the namespace"
        )
        super().__init__(
            f"{workload} failed to become ready within {timeout_seconds}s",
            context="\n".join(lines),
        )

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["kubectl"] = self.detail or None
        payload["events"] = [event.to_dict() for event in self.events]
        return payload


class KubectlError(KubeDeployError):
    """Raised when a kubectl query fails."""

    pass


class ClusterUnavailableError(KubectlError):
    """Raised when the cluster client itself cannot be used."""

    pass


class HealthCheckError(KubeDeployError):
    """Raised when the health probe fails under strict verification."""

    pass


class UsageError(KubeDeployError):
    """Raised when the requested operation is not recognized."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Unknown operation '{operation}'")
