"""Docker service for building and publishing the service image."""

import subprocess
from pathlib import Path
from typing import List, Optional

from kubedeploy.constants import DEFAULT_DOCKER
from kubedeploy.exceptions import BuildError, PublishError, MissingToolError
from kubedeploy.logger import DeployLogger
from kubedeploy.models.cluster import ImageRef
from kubedeploy.models.results import ExecutionResult
from kubedeploy.utils import tool_exists


class DockerService:
    """Handles Docker image building operations."""

    def __init__(self, docker: str = DEFAULT_DOCKER, logger: Optional[DeployLogger] = None):
        self.docker = docker
        self.logger = logger

    def is_available(self) -> bool:
        """Check if docker is installed."""
        return tool_exists(self.docker)

    def _run_command(self, args: List[str], cwd: Optional[Path] = None) -> ExecutionResult:
        cmd = [self.docker] + args
        cmd_string = " ".join(cmd)

        if self.logger:
            self.logger.log_command(cmd_string)

        try:
            result = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True)
        except FileNotFoundError:
            raise MissingToolError(self.docker)

        if self.logger:
            self.logger.log_output(result.stdout, "stdout")
            self.logger.log_output(result.stderr, "stderr")

        return ExecutionResult(
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            command=cmd_string,
        )

    def build(self, image: ImageRef, context_dir: Path) -> ImageRef:
        """
        Build Docker image.

        Args:
            image: Image reference to tag the build with
            context_dir: Build context (must hold the Dockerfile)

        Returns:
            The built image reference

        Raises:
            BuildError: If docker build fails
        """
        result = self._run_command(["build", "-t", image.reference, "."], cwd=context_dir)
        if result.is_failure:
            raise BuildError(
                f"Docker build failed for {image.reference}",
                context=_tail(result.stderr),
            )
        return image

    def push(self, image: ImageRef) -> None:
        """
        Push Docker image to its registry.

        Raises:
            PublishError: If docker push fails
        """
        result = self._run_command(["push", image.reference])
        if result.is_failure:
            raise PublishError(
                f"Docker push failed for {image.reference}",
                context=_tail(result.stderr),
            )


def _tail(output: str, lines: int = 5) -> Optional[str]:
    """Last few lines of command output, for error context."""
    text = output.strip()
    if not text:
        return None
    return "\n".join(text.splitlines()[-lines:])
