"""Prerequisite checks run before an operation touches the cluster."""

from kubedeploy.exceptions import MissingToolError, UnknownContextError
from kubedeploy.logger import DeployLogger
from kubedeploy.models.context import DeploymentContext


class PrerequisiteChecker:
    """
    Verifies the local toolchain and cluster context.

    The only side effect is switching the active kubectl context.
    """

    def __init__(self, context: DeploymentContext, cluster, images, logger: DeployLogger):
        self.context = context
        self.cluster = cluster
        self.images = images
        self.logger = logger

    def check(self) -> None:
        """
        Run all checks.

        Raises:
            MissingToolError: kubectl (or docker, unless skipping the build) missing
            UnknownContextError: Requested context not in kubeconfig
        """
        self.logger.step("Checking prerequisites")

        self._check_kubectl()

        if not self.context.skip_build and not self.images.is_available():
            raise MissingToolError(self.context.docker)

        self._select_context()
        self.logger.success("Prerequisites check passed")

    def check_cluster(self) -> None:
        """Cluster-side checks only (used by operations that never build)."""
        self._check_kubectl()
        self._select_context()

    def _check_kubectl(self) -> None:
        if not self.cluster.is_available():
            raise MissingToolError(self.context.kubectl)

    def _select_context(self) -> None:
        name = self.context.cluster_context
        if not name:
            current = self.cluster.current_context()
            if current:
                self.logger.info(f"Using current Kubernetes context: {current}")
            return

        if not self.cluster.context_exists(name):
            raise UnknownContextError(name)
        self.cluster.use_context(name)
        self.logger.info(f"Using Kubernetes context: {name}")
