"""
Deployment Context Model

Immutable per-invocation configuration threaded through every component.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any

from kubedeploy.constants import (
    DEFAULT_NAMESPACE,
    DEFAULT_IMAGE_TAG,
    DEFAULT_APP_NAME,
    DEFAULT_SERVICE_NAME,
    DEFAULT_MANIFEST_DIR,
    DEFAULT_HEALTH_CHECK_SCRIPT,
    DEFAULT_HEALTH_CHECK_TIMEOUT,
    DEFAULT_WAIT_TIMEOUT,
    DEFAULT_EVENTS_LIMIT,
    DEFAULT_KUBECTL,
    DEFAULT_DOCKER,
)
from kubedeploy.models.cluster import ImageRef
from kubedeploy.models.resources import ResourceDescriptor


@dataclass(frozen=True)
class DeploymentContext:
    """Configuration for a single command execution."""

    namespace: str = DEFAULT_NAMESPACE
    cluster_context: Optional[str] = None
    dry_run: bool = False
    skip_build: bool = False
    image_tag: str = DEFAULT_IMAGE_TAG
    registry: Optional[str] = None
    workdir: Path = field(default_factory=Path.cwd)
    manifest_dir: str = DEFAULT_MANIFEST_DIR
    app_name: str = DEFAULT_APP_NAME
    service_name: str = DEFAULT_SERVICE_NAME
    wait_timeout: int = DEFAULT_WAIT_TIMEOUT
    events_limit: int = DEFAULT_EVENTS_LIMIT
    health_check_script: Optional[str] = DEFAULT_HEALTH_CHECK_SCRIPT
    health_check_timeout: int = DEFAULT_HEALTH_CHECK_TIMEOUT
    strict_verify: bool = False
    kubectl: str = DEFAULT_KUBECTL
    docker: str = DEFAULT_DOCKER

    def __post_init__(self):
        if not self.namespace:
            raise ValueError("namespace must not be empty")
        if self.wait_timeout <= 0:
            raise ValueError(f"wait timeout must be positive, got {self.wait_timeout}")
        # Empty strings from the environment mean "not set"
        if not self.cluster_context:
            object.__setattr__(self, "cluster_context", None)
        if not self.registry:
            object.__setattr__(self, "registry", None)
        else:
            object.__setattr__(self, "registry", self.registry.rstrip("/"))
        object.__setattr__(self, "workdir", Path(self.workdir))

    @property
    def image(self) -> ImageRef:
        return ImageRef(name=self.app_name, tag=self.image_tag, registry=self.registry)

    @property
    def image_reference(self) -> str:
        """Full image reference, e.g. registry.example.com/bingo-grpc:latest."""
        return self.image.reference

    @property
    def selector(self) -> str:
        """Label selector for the workload's pods and companion resources."""
        return f"app={self.app_name}"

    @property
    def workload_ref(self) -> str:
        return f"deployment/{self.app_name}"

    @property
    def manifest_root(self) -> Path:
        return self._resolve(self.manifest_dir)

    @property
    def health_check_path(self) -> Optional[Path]:
        if not self.health_check_script:
            return None
        return self._resolve(self.health_check_script)

    @property
    def log_root(self) -> Path:
        return self.workdir / "logs"

    def manifest_path(self, descriptor: ResourceDescriptor) -> Path:
        return self.manifest_root / descriptor.manifest

    def _resolve(self, value: str) -> Path:
        path = Path(value).expanduser()
        return path if path.is_absolute() else self.workdir / path

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for display and JSON output."""
        return {
            "namespace": self.namespace,
            "context": self.cluster_context,
            "dry_run": self.dry_run,
            "skip_build": self.skip_build,
            "image": self.image_reference,
            "manifest_dir": str(self.manifest_root),
        }
