"""Deletes manifest units in reverse apply order."""

from typing import Optional

from kubedeploy.constants import ALREADY_ABSENT
from kubedeploy.logger import DeployLogger
from kubedeploy.models.context import DeploymentContext
from kubedeploy.models.resources import ResourceSet, DEFAULT_RESOURCES
from kubedeploy.models.results import OperationOutcome, StageReport


class TeardownEngine:
    """
    Walks the teardown sequence with ignore-absent deletes.

    Deleting something already gone is a success. A per-resource rejection
    is recorded as FAILED and the walk continues. Client-level failures
    (ClusterUnavailableError) propagate and abort.
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

    def teardown(self) -> StageReport:
        report = StageReport("teardown")
        self.logger.step("Cleaning up")

        for descriptor in self.resources.teardown_sequence():
            path = self.context.manifest_path(descriptor)

            if not path.is_file():
                self.logger.log(f"Manifest {descriptor.manifest} not found, nothing to delete")
                report.record(OperationOutcome.skipped(descriptor.name, f"{path} not found"))
                continue

            self.logger.log(f"Deleting {descriptor.manifest} ({descriptor.kind})...")
            outcome = self.cluster.delete(path, ignore_absent=True)

            if outcome.is_failure:
                self.logger.warning(f"Could not delete {descriptor.manifest}: {outcome.detail}")
                report.record(OperationOutcome.failed(descriptor.name, outcome.detail or ""))
                continue

            report.record(OperationOutcome.success(descriptor.name, outcome.detail))
            if outcome.detail == ALREADY_ABSENT:
                self.logger.success(f"{descriptor.manifest} already absent")
            else:
                self.logger.success(f"Deleted {descriptor.manifest}")

        self.logger.success(f"Cleanup completed ({report.summary_line()})")
        return report
