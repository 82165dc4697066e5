"""kubedeploy - Info operation"""

from kubedeploy.base import BaseCommand
from kubedeploy.core.prerequisites import PrerequisiteChecker
from kubedeploy.core.reporter import Reporter


class InfoCommand(BaseCommand):
    """Show pods, services, ingresses and autoscalers in the namespace."""

    name = "info"

    def execute(self) -> None:
        self.show_header(title="Info")

        PrerequisiteChecker(self.context, self.cluster, self.images, self.logger).check_cluster()

        info = Reporter(self.context, self.cluster, self.logger).report()

        if self.json_output:
            self.output_json({"operation": self.name, **info})
