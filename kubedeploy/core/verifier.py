"""Post-deploy sanity check."""

from typing import Optional

from kubedeploy.exceptions import HealthCheckError, KubeDeployError
from kubedeploy.logger import DeployLogger
from kubedeploy.models.cluster import ProbeResult, VerificationSummary
from kubedeploy.models.context import DeploymentContext


class Verifier:
    """
    Best-effort verification of a live deployment.

    Pod count, service endpoints and the health probe are queried
    independently. Failures become warnings in the summary; verification
    always completes. Only strict mode turns an unhealthy probe into an error.
    """

    def __init__(self, context: DeploymentContext, cluster, probe, logger: DeployLogger):
        self.context = context
        self.cluster = cluster
        self.probe = probe
        self.logger = logger

    def verify(self) -> Optional[VerificationSummary]:
        if self.context.dry_run:
            self.logger.info("Skipping deployment verification (dry-run mode)")
            return None

        self.logger.step("Verifying deployment")
        summary = VerificationSummary()

        self._check_pods(summary)
        self._check_endpoints(summary)
        self._check_health(summary)

        self.logger.success("Deployment verification completed")

        if self.context.strict_verify and summary.probe == ProbeResult.UNHEALTHY:
            raise HealthCheckError(
                "Health checks failed",
                context="Strict verification is enabled (STRICT_VERIFY=true)",
            )

        return summary

    def _check_pods(self, summary: VerificationSummary) -> None:
        try:
            pods = self.cluster.get_pods(self.context.selector)
        except KubeDeployError as e:
            self._warn(summary, f"Could not list pods: {e.message}")
            return

        summary.pods = list(pods)
        summary.total_pods = len(pods)
        summary.running_pods = sum(1 for pod in pods if pod.is_running)
        self.logger.info(f"Ready pods: {summary.running_pods}/{summary.total_pods}")

    def _check_endpoints(self, summary: VerificationSummary) -> None:
        service = self.context.service_name
        try:
            addresses = self.cluster.get_endpoints(service)
        except KubeDeployError as e:
            self._warn(summary, f"Could not read endpoints of {service}: {e.message}")
            return

        if addresses is None:
            self._warn(summary, f"Service {service} not found")
            return

        summary.endpoints = len(addresses)
        self.logger.info(f"Service endpoints: {summary.endpoints}")

    def _check_health(self, summary: VerificationSummary) -> None:
        if not self.probe.is_available():
            self.logger.log("No health check script found, skipping probe")
            summary.probe = ProbeResult.UNAVAILABLE
            return

        self.logger.info("Running health checks...")
        with self.logger.spinner("Running health checks"):
            summary.probe = self.probe.run()

        if summary.probe == ProbeResult.HEALTHY:
            self.logger.success("Health checks passed")
        else:
            self._warn(summary, "Health checks failed - service may need time to start")

    def _warn(self, summary: VerificationSummary, message: str) -> None:
        summary.add_warning(message)
        self.logger.warning(message)
