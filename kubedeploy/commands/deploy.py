"""kubedeploy - Deploy operation"""

from typing import Any, Dict, Optional

from kubedeploy.base import BaseCommand
from kubedeploy.core.apply_engine import ApplyEngine
from kubedeploy.core.convergence import ConvergenceWaiter
from kubedeploy.core.image_builder import ImageBuildStage
from kubedeploy.core.prerequisites import PrerequisiteChecker
from kubedeploy.core.reporter import Reporter
from kubedeploy.core.verifier import Verifier
from kubedeploy.models.cluster import ReadinessState, VerificationSummary
from kubedeploy.models.results import StageReport


class DeployCommand(BaseCommand):
    """Check, build, apply, wait, verify and report."""

    name = "deploy"

    def __init__(self, context, **kwargs):
        super().__init__(context, **kwargs)
        self.build_report: Optional[StageReport] = None
        self.apply_report: Optional[StageReport] = None
        self.readiness = ReadinessState.PENDING
        self.verification: Optional[VerificationSummary] = None
        self.info: Dict[str, Any] = {}

    def execute(self) -> None:
        context = self.context

        self.show_header(
            title="Deploy",
            subtitle="Dry run (client-side validation only)" if context.dry_run else None,
            details={
                "Image": context.image_reference,
                "Context": context.cluster_context or "current",
                "Manifests": context.manifest_root,
            },
        )

        PrerequisiteChecker(context, self.cluster, self.images, self.logger).check()
        self.build_report = ImageBuildStage(context, self.images, self.logger).run()
        self.apply_report = ApplyEngine(
            context, self.cluster, self.logger, resources=self.resources
        ).apply()
        self.readiness = ConvergenceWaiter(context, self.cluster, self.logger).wait()
        self.verification = Verifier(context, self.cluster, self.probe, self.logger).verify()
        self.info = Reporter(context, self.cluster, self.logger).report()

        if self.json_output:
            self.output_json(self.to_dict())
            return

        self.console.print()
        if context.dry_run:
            self.print_success("Dry run completed, no changes were made")
        else:
            self.print_success("Deployment completed successfully!")
        self.print_dim(f"Logs saved to: {self.logger.log_path}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.name,
            "context": self.context.to_dict(),
            "build": self.build_report.to_dict() if self.build_report else None,
            "apply": self.apply_report.to_dict() if self.apply_report else None,
            "readiness": self.readiness.value,
            "verification": self.verification.to_dict() if self.verification else None,
            "info": self.info,
        }
