"""
Base Command Class

Abstract base for all kubedeploy operations.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from typing import Optional, Any, Dict
import json
from rich.console import Console

from kubedeploy.exceptions import KubeDeployError
from kubedeploy.logger import DeployLogger
from kubedeploy.models.context import DeploymentContext
from kubedeploy.models.resources import ResourceSet
from kubedeploy.services import DockerService, HealthProbe, KubectlService
from kubedeploy.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization
    - Client construction (cluster, image, probe)
    - Header display
    - Error handling and exit codes
    - JSON output support
    """

    name = ""

    def __init__(
        self,
        context: DeploymentContext,
        verbose: bool = False,
        json_output: bool = False,
        console: Optional[Console] = None,
        cluster=None,
        images=None,
        probe=None,
        resources: Optional[ResourceSet] = None,
    ):
        self.context = context
        self.verbose = verbose
        self.json_output = json_output
        self.console = console or Console()
        self.cluster = cluster
        self.images = images
        self.probe = probe
        self.resources = resources
        self.logger: Optional[DeployLogger] = None

    def init_logger(self) -> DeployLogger:
        """
        Initialize command logger.

        The log file is always written; JSON mode only silences the console.

        Returns:
            DeployLogger instance
        """
        self.logger = DeployLogger(
            self.context.namespace,
            self.name,
            self.context.log_root,
            verbose=self.verbose,
            quiet=self.json_output,
            console=self.console,
        )
        return self.logger

    def init_clients(self) -> None:
        """Build any client that was not injected."""
        if self.cluster is None:
            self.cluster = KubectlService(
                self.context.namespace, kubectl=self.context.kubectl, logger=self.logger
            )
        if self.images is None:
            self.images = DockerService(docker=self.context.docker, logger=self.logger)
        if self.probe is None:
            self.probe = HealthProbe(
                self.context.health_check_path,
                timeout=self.context.health_check_timeout,
                logger=self.logger,
            )

    def output_json(self, data: Dict[str, Any], exit_code: int = 0) -> None:
        """
        Output data as JSON.

        Args:
            data: Data to output as JSON
            exit_code: Exit code (0 for success, non-zero for error)
        """
        print(json.dumps(data, indent=2, default=str))
        if exit_code != 0:
            raise SystemExit(exit_code)

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in JSON or verbose mode)."""
        if not self.verbose and not self.json_output:
            show_header(
                title=title,
                subtitle=subtitle,
                namespace=self.context.namespace,
                details=details,
                console=self.console,
            )

    def print_success(self, message: str) -> None:
        """Print success message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[green]✓ {message}[/green]")

    def print_dim(self, message: str) -> None:
        """Print dim message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[dim]{message}[/dim]")

    def _print_log_location(self) -> None:
        if self.logger and not self.json_output:
            self.console.print(f"\n[dim]Logs saved to:[/dim] {self.logger.log_path}\n")

    @abstractmethod
    def execute(self) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self) -> None:
        """
        Run command with error handling.

        Raises:
            SystemExit: 1 on any failure, 130 when interrupted
        """
        logger = self.init_logger()

        with logger:
            try:
                self.init_clients()
                self.execute()
            except KeyboardInterrupt:
                logger.has_errors = True
                logger.log("Operation cancelled by user", "WARNING")
                if not self.json_output:
                    self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
                self._print_log_location()
                raise SystemExit(130)
            except SystemExit:
                raise
            except KubeDeployError as e:
                logger.log_error(e.message, context=e.context)
                self._print_log_location()
                if self.json_output:
                    self.output_json(e.to_dict(), exit_code=1)
                raise SystemExit(1)
            except Exception as e:
                error_type = type(e).__name__
                logger.log_error(f"{error_type}: {e}")
                self._print_log_location()
                if self.json_output:
                    self.output_json({"error": f"{error_type}: {e}"}, exit_code=1)
                raise SystemExit(1)
