"""Build and publish stage for the service image."""

from kubedeploy.logger import DeployLogger
from kubedeploy.models.context import DeploymentContext
from kubedeploy.models.results import OperationOutcome, StageReport


class ImageBuildStage:
    """Builds the image and pushes it when a registry is configured."""

    def __init__(self, context: DeploymentContext, images, logger: DeployLogger):
        self.context = context
        self.images = images
        self.logger = logger

    def run(self) -> StageReport:
        """
        Build (and optionally push) the image.

        Raises:
            BuildError: If the build fails
            PublishError: If the push fails
        """
        report = StageReport("build")

        if self.context.skip_build:
            self.logger.info("Skipping Docker build (SKIP_BUILD=true)")
            report.record(OperationOutcome.skipped("build", "skip-build requested"))
            return report

        image = self.context.image
        self.logger.step("Building Docker image")

        with self.logger.spinner(f"Building {image.reference}"):
            self.images.build(image, self.context.workdir)
        report.record(OperationOutcome.success("build", image.reference))

        if not self.context.registry:
            self.logger.success(f"Image built: {image.reference}")
            report.record(OperationOutcome.skipped("push", "no registry configured"))
            return report

        if self.context.dry_run:
            self.logger.success(f"Image built: {image.reference}")
            self.logger.info("Skipping image push (dry-run mode)")
            report.record(OperationOutcome.skipped("push", "dry-run"))
            return report

        self.logger.info("Pushing image to registry...")
        with self.logger.spinner(f"Pushing {image.reference}"):
            self.images.push(image)
        self.logger.success(f"Image pushed: {image.reference}")
        report.record(OperationOutcome.success("push", image.reference))
        return report
