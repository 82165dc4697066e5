"""
Kubectl Service

Cluster control client. Every call shells out to kubectl.
"""

import json
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional

from kubedeploy.constants import (
    ALREADY_ABSENT,
    DEFAULT_KUBECTL,
    SERVER_ERROR_PREFIX,
    UNREACHABLE_MARKERS,
)
from kubedeploy.exceptions import KubectlError, ClusterUnavailableError
from kubedeploy.logger import DeployLogger
from kubedeploy.models.cluster import ClusterEvent, PodStatus, ReadinessState
from kubedeploy.models.results import ExecutionResult, OperationOutcome
from kubedeploy.utils import tool_exists

# Grace period on top of `kubectl wait --timeout` before the process is killed
WAIT_GRACE_SECONDS = 30


class KubectlService:
    """
    Service for cluster operations.

    Responsibilities:
    - Apply and delete manifests by file reference
    - Block on workload availability
    - Query events, pods, endpoints and labelled resources
    - Context lookup and switching
    """

    def __init__(
        self,
        namespace: str,
        kubectl: str = DEFAULT_KUBECTL,
        logger: Optional[DeployLogger] = None,
    ):
        self.namespace = namespace
        self.kubectl = kubectl
        self.logger = logger
        self.wait_error = ""

    def _run_command(
        self,
        args: List[str],
        check: bool = False,
        timeout: Optional[int] = None,
    ) -> ExecutionResult:
        """
        Run kubectl command.

        Args:
            args: Command arguments (e.g., ['get', 'pods'])
            check: Raise KubectlError on non-zero exit
            timeout: Process timeout in seconds

        Returns:
            ExecutionResult object

        Raises:
            ClusterUnavailableError: If kubectl is missing or the API is unreachable
            KubectlError: If the command fails and check=True
        """
        cmd = [self.kubectl] + args
        cmd_string = " ".join(cmd)

        if self.logger:
            self.logger.log_command(cmd_string)

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                timeout=timeout,
            )
        except FileNotFoundError:
            raise ClusterUnavailableError(
                f"{self.kubectl} is not installed or not in PATH",
                context=f"Command: {cmd_string}",
            )

        exec_result = ExecutionResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            command=cmd_string,
        )

        if self.logger:
            self.logger.log_output(exec_result.stdout, "stdout")
            self.logger.log_output(exec_result.stderr, "stderr")

        if exec_result.is_failure and self._is_unreachable(exec_result.stderr):
            raise ClusterUnavailableError(
                "Cannot reach the Kubernetes API server",
                context=exec_result.stderr.strip(),
            )

        if check and exec_result.is_failure:
            raise KubectlError(
                f"kubectl command failed: {cmd_string}",
                context=f"Exit code: {exec_result.returncode}\nError: {exec_result.stderr.strip()}",
            )

        return exec_result

    @staticmethod
    def _is_unreachable(stderr: str) -> bool:
        lowered = stderr.strip().lower()
        # The server answered; a refused dial here is its own upstream (e.g. a webhook)
        if lowered.startswith(SERVER_ERROR_PREFIX):
            return False
        return any(marker in lowered for marker in UNREACHABLE_MARKERS)

    @staticmethod
    def _is_not_found(stderr: str) -> bool:
        return "notfound" in stderr.replace(" ", "").lower()

    def _get_json(self, args: List[str]) -> Dict[str, Any]:
        result = self._run_command(args + ["-o", "json"], check=True)
        return self._parse_json(result)

    @staticmethod
    def _parse_json(result: ExecutionResult) -> Dict[str, Any]:
        try:
            return json.loads(result.stdout or "{}")
        except json.JSONDecodeError as e:
            raise KubectlError(
                f"Unexpected kubectl output for: {result.command}", context=str(e)
            )

    def is_available(self) -> bool:
        """Check if kubectl is installed."""
        return tool_exists(self.kubectl)

    # Contexts

    def context_exists(self, name: str) -> bool:
        result = self._run_command(["config", "get-contexts", name])
        return result.is_success

    def use_context(self, name: str) -> None:
        self._run_command(["config", "use-context", name], check=True)

    def current_context(self) -> Optional[str]:
        result = self._run_command(["config", "current-context"])
        if result.is_failure:
            return None
        return result.stdout.strip() or None

    # Mutations

    def apply(self, manifest: Path, dry_run: bool = False) -> OperationOutcome:
        """
        Apply one manifest file.

        Args:
            manifest: Manifest path
            dry_run: Validate client-side without touching the cluster

        Returns:
            SUCCESS, or FAILED with kubectl's error output
        """
        args = ["apply", "-f", str(manifest)]
        if dry_run:
            args.append("--dry-run=client")

        result = self._run_command(args)
        if result.is_failure:
            return OperationOutcome.failed(manifest.name, result.stderr.strip() or result.stdout.strip())

        detail = "validated" if dry_run else (result.stdout.strip() or "applied")
        return OperationOutcome.success(manifest.name, detail)

    def delete(self, manifest: Path, ignore_absent: bool = True) -> OperationOutcome:
        """
        Delete the resources in one manifest file.

        An absent resource counts as success when ignore_absent is set.
        """
        args = ["delete", "-f", str(manifest)]
        if ignore_absent:
            args.append("--ignore-not-found=true")

        result = self._run_command(args)
        if result.is_failure:
            return OperationOutcome.failed(manifest.name, result.stderr.strip() or result.stdout.strip())

        # --ignore-not-found prints nothing when there was nothing to delete
        if not result.stdout.strip():
            return OperationOutcome.success(manifest.name, ALREADY_ABSENT)
        return OperationOutcome.success(manifest.name, "deleted")

    # Convergence

    def wait_for_available(self, workload_ref: str, timeout_seconds: int) -> ReadinessState:
        """
        Block until the workload reports Available or the timeout elapses.

        On TIMED_OUT, `wait_error` holds kubectl's own message (for example
        a NotFound for the workload).
        """
        args = [
            "wait",
            "--for=condition=available",
            f"--timeout={timeout_seconds}s",
            workload_ref,
            "-n",
            self.namespace,
        ]

        deadline = timeout_seconds + WAIT_GRACE_SECONDS
        self.wait_error = ""
        try:
            result = self._run_command(args, timeout=deadline)
        except subprocess.TimeoutExpired:
            self.wait_error = f"kubectl wait did not exit within {deadline}s"
            if self.logger:
                self.logger.log(self.wait_error, "WARNING")
            return ReadinessState.TIMED_OUT

        if result.is_failure:
            self.wait_error = result.output
            return ReadinessState.TIMED_OUT
        return ReadinessState.READY

    # Queries

    def list_events(self, namespace: Optional[str] = None, limit: int = 10) -> List[ClusterEvent]:
        """Most recent events in the namespace, newest first."""
        data = self._get_json(
            [
                "get",
                "events",
                "--sort-by=.metadata.creationTimestamp",
                "-n",
                namespace or self.namespace,
            ]
        )
        events = [ClusterEvent.from_item(item) for item in data.get("items", [])]
        if limit <= 0:
            return []
        return list(reversed(events[-limit:]))

    def get_pods(self, selector: str) -> List[PodStatus]:
        data = self._get_json(["get", "pods", "-l", selector, "-n", self.namespace])
        return [PodStatus.from_item(item) for item in data.get("items", [])]

    def get_endpoints(self, service_name: str) -> Optional[List[str]]:
        """
        Endpoint addresses of a service.

        Returns:
            List of IPs, or None if the endpoints object does not exist
        """
        args = ["get", "endpoints", service_name, "-n", self.namespace, "-o", "json"]
        result = self._run_command(args)

        if result.is_failure:
            if self._is_not_found(result.stderr):
                return None
            raise KubectlError(
                f"Failed to read endpoints for {service_name}",
                context=result.stderr.strip(),
            )

        data = self._parse_json(result)
        addresses = []
        for subset in data.get("subsets") or []:
            for address in subset.get("addresses") or []:
                if address.get("ip"):
                    addresses.append(address["ip"])
        return addresses

    def list_resources(self, kind: str, selector: str) -> List[Dict[str, Any]]:
        """Raw items of a resource kind matching the label selector."""
        data = self._get_json(["get", kind, "-l", selector, "-n", self.namespace])
        return data.get("items", [])
