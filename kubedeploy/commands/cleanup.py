"""kubedeploy - Cleanup operation"""

from typing import Optional

from kubedeploy.base import BaseCommand
from kubedeploy.core.prerequisites import PrerequisiteChecker
from kubedeploy.core.teardown import TeardownEngine
from kubedeploy.models.results import StageReport


class CleanupCommand(BaseCommand):
    """Delete every manifest unit in reverse apply order."""

    name = "cleanup"

    def __init__(self, context, **kwargs):
        super().__init__(context, **kwargs)
        self.report: Optional[StageReport] = None

    def execute(self) -> None:
        self.show_header(title="Cleanup", details={"Manifests": self.context.manifest_root})

        PrerequisiteChecker(self.context, self.cluster, self.images, self.logger).check_cluster()

        self.report = TeardownEngine(
            self.context, self.cluster, self.logger, resources=self.resources
        ).teardown()

        if self.json_output:
            self.output_json({"operation": self.name, "teardown": self.report.to_dict()})
            return

        self.console.print()
        self.print_success(f"Namespace {self.context.namespace} cleaned up")
        self.print_dim(f"Logs saved to: {self.logger.log_path}")
