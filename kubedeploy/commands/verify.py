"""kubedeploy - Verify operation"""

from typing import Optional

from rich.table import Table

from kubedeploy.base import BaseCommand
from kubedeploy.core.prerequisites import PrerequisiteChecker
from kubedeploy.core.verifier import Verifier
from kubedeploy.models.cluster import VerificationSummary


class VerifyCommand(BaseCommand):
    """Check pods, service endpoints and the health probe of a live deployment."""

    name = "verify"

    def __init__(self, context, **kwargs):
        super().__init__(context, **kwargs)
        self.summary: Optional[VerificationSummary] = None

    def execute(self) -> None:
        self.show_header(title="Verify")

        PrerequisiteChecker(self.context, self.cluster, self.images, self.logger).check_cluster()

        self.summary = Verifier(self.context, self.cluster, self.probe, self.logger).verify()

        if self.json_output:
            self.output_json(
                {
                    "operation": self.name,
                    "namespace": self.context.namespace,
                    "verification": self.summary.to_dict() if self.summary else None,
                }
            )
            return

        if self.summary is None:
            return

        self.console.print()
        self.console.print(self._summary_table())

    def _summary_table(self) -> Table:
        summary = self.summary
        table = Table(
            title=f"{self.context.namespace} - Verification",
            title_justify="left",
            padding=(0, 1),
        )
        table.add_column("Check", style="cyan", no_wrap=True)
        table.add_column("Result")

        table.add_row("Running pods", f"{summary.running_pods}/{summary.total_pods}")
        table.add_row(
            "Service endpoints",
            str(summary.endpoints) if summary.service_present else "[yellow]service not found[/yellow]",
        )
        table.add_row("Health probe", summary.probe.value)
        table.add_row("Warnings", str(len(summary.warnings)))
        return table
