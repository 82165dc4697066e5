"""Recording stand-ins for the cluster, image and probe clients."""

from pathlib import Path
from typing import Dict, List, Optional

from kubedeploy.constants import ALREADY_ABSENT
from kubedeploy.exceptions import BuildError, ClusterUnavailableError, KubectlError
from kubedeploy.models import (
    ClusterEvent,
    OperationOutcome,
    PodStatus,
    ProbeResult,
    ReadinessState,
)


class FakeCluster:
    """Recording stand-in for KubectlService."""

    def __init__(
        self,
        available: bool = True,
        contexts: tuple = ("test-context",),
        readiness: ReadinessState = ReadinessState.READY,
        apply_failures: Optional[Dict[str, str]] = None,
        delete_failures: Optional[Dict[str, str]] = None,
        live: tuple = (),
        events: Optional[List[ClusterEvent]] = None,
        events_error: bool = False,
        pods: Optional[List[PodStatus]] = None,
        endpoints: Optional[List[str]] = None,
        resources: Optional[Dict[str, list]] = None,
        failing_kinds: tuple = (),
        unreachable: bool = False,
        wait_error: str = "",
    ):
        self.available = available
        self.contexts = contexts
        self.readiness = readiness
        self.apply_failures = apply_failures or {}
        self.delete_failures = delete_failures or {}
        self.live = set(live)
        self.events = events or []
        self.events_error = events_error
        self.pods = pods or []
        self.endpoints = endpoints
        self.resources = resources or {}
        self.failing_kinds = failing_kinds
        self.unreachable = unreachable
        self.wait_error = wait_error
        self.calls: List[tuple] = []

    def calls_named(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]

    def is_available(self) -> bool:
        self.calls.append(("is_available",))
        return self.available

    def context_exists(self, name: str) -> bool:
        self.calls.append(("context_exists", name))
        return name in self.contexts

    def use_context(self, name: str) -> None:
        self.calls.append(("use_context", name))

    def current_context(self) -> Optional[str]:
        self.calls.append(("current_context",))
        return self.contexts[0] if self.contexts else None

    def apply(self, manifest: Path, dry_run: bool = False) -> OperationOutcome:
        self.calls.append(("apply", manifest.name, dry_run))
        if manifest.name in self.apply_failures:
            return OperationOutcome.failed(manifest.name, self.apply_failures[manifest.name])
        if dry_run:
            return OperationOutcome.success(manifest.name, "validated")
        self.live.add(manifest.name)
        return OperationOutcome.success(manifest.name, "configured")

    def delete(self, manifest: Path, ignore_absent: bool = True) -> OperationOutcome:
        self.calls.append(("delete", manifest.name, ignore_absent))
        if self.unreachable:
            raise ClusterUnavailableError("Cannot reach the Kubernetes API server")
        if manifest.name in self.delete_failures:
            return OperationOutcome.failed(manifest.name, self.delete_failures[manifest.name])
        if manifest.name not in self.live:
            return OperationOutcome.success(manifest.name, ALREADY_ABSENT)
        self.live.discard(manifest.name)
        return OperationOutcome.success(manifest.name, "deleted")

    def wait_for_available(self, workload_ref: str, timeout_seconds: int) -> ReadinessState:
        self.calls.append(("wait_for_available", workload_ref, timeout_seconds))
        return self.readiness

    def list_events(self, namespace: Optional[str] = None, limit: int = 10) -> List[ClusterEvent]:
        self.calls.append(("list_events", namespace, limit))
        if self.events_error:
            raise KubectlError("kubectl command failed: get events")
        return self.events[:limit]

    def get_pods(self, selector: str) -> List[PodStatus]:
        self.calls.append(("get_pods", selector))
        return self.pods

    def get_endpoints(self, service_name: str) -> Optional[List[str]]:
        self.calls.append(("get_endpoints", service_name))
        return self.endpoints

    def list_resources(self, kind: str, selector: str) -> list:
        self.calls.append(("list_resources", kind, selector))
        if kind in self.failing_kinds:
            raise KubectlError(f"kubectl command failed: get {kind}")
        return self.resources.get(kind, [])


class FakeImages:
    """Recording stand-in for DockerService."""

    def __init__(self, available: bool = True, fail_build: bool = False):
        self.available = available
        self.fail_build = fail_build
        self.calls: List[tuple] = []

    def is_available(self) -> bool:
        return self.available

    def build(self, image, context_dir):
        self.calls.append(("build", image.reference, Path(context_dir)))
        if self.fail_build:
            raise BuildError(f"Docker build failed for {image.reference}")
        return image

    def push(self, image) -> None:
        self.calls.append(("push", image.reference))


class FakeProbe:
    def __init__(self, result: ProbeResult = ProbeResult.HEALTHY):
        self.result = result
        self.runs = 0

    def is_available(self) -> bool:
        return self.result != ProbeResult.UNAVAILABLE

    def run(self) -> ProbeResult:
        self.runs += 1
        return self.result
