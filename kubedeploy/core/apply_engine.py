"""Applies manifest units to the cluster in forward order."""

from typing import Optional

from kubedeploy.exceptions import ApplyError
from kubedeploy.logger import DeployLogger
from kubedeploy.models.context import DeploymentContext
from kubedeploy.models.resources import ResourceSet, DEFAULT_RESOURCES
from kubedeploy.models.results import OperationOutcome, StageReport


class ApplyEngine:
    """
    Walks the apply sequence.

    A manifest missing locally is skipped with a warning. A manifest the
    cluster rejects stops the walk with ApplyError.
    """

    def __init__(
        self,
        context: DeploymentContext,
        cluster,
        logger: DeployLogger,
        resources: Optional[ResourceSet] = None,
    ):
        self.context = context
        self.cluster = cluster
        self.logger = logger
        self.resources = resources or DEFAULT_RESOURCES

    def apply(self) -> StageReport:
        report = StageReport("apply")
        self.logger.step("Applying Kubernetes manifests")

        if self.context.dry_run:
            self.logger.warning("Running in dry-run mode")

        for descriptor in self.resources.apply_sequence():
            path = self.context.manifest_path(descriptor)

            if not path.is_file():
                self.logger.warning(f"Manifest {descriptor.manifest} not found, skipping")
                report.record(OperationOutcome.skipped(descriptor.name, f"{path} not found"))
                continue

            self.logger.log(f"Applying {descriptor.manifest} ({descriptor.kind})...")
            outcome = self.cluster.apply(path, dry_run=self.context.dry_run)

            if outcome.is_failure:
                report.record(OperationOutcome.failed(descriptor.name, outcome.detail or ""))
                raise ApplyError(descriptor.manifest, outcome.detail or "")

            report.record(OperationOutcome.success(descriptor.name, outcome.detail))
            verb = "Validated" if self.context.dry_run else "Applied"
            self.logger.success(f"{verb} {descriptor.manifest}")

        self.logger.success(f"All manifests applied ({report.summary_line()})")
        return report
