"""Blocks until the primary workload is available."""

from typing import List

from rich.table import Table

from kubedeploy.exceptions import ConvergenceTimeoutError, KubeDeployError
from kubedeploy.logger import DeployLogger
from kubedeploy.models.cluster import ClusterEvent, ReadinessState
from kubedeploy.models.context import DeploymentContext


class ConvergenceWaiter:
    """
    Single blocking synchronization point of the deploy flow.

    State runs PENDING -> READY or PENDING -> TIMED_OUT and is terminal once
    reached. A dry run never leaves PENDING because nothing is waited on.
    """

    def __init__(self, context: DeploymentContext, cluster, logger: DeployLogger):
        self.context = context
        self.cluster = cluster
        self.logger = logger
        self.state = ReadinessState.PENDING

    def wait(self) -> ReadinessState:
        """
        Wait for the workload's Available condition.

        Raises:
            ConvergenceTimeoutError: If the timeout elapses first
        """
        if self.context.dry_run:
            self.logger.info("Skipping deployment wait (dry-run mode)")
            return self.state

        if self.state.is_terminal:
            return self.state

        workload = self.context.workload_ref
        timeout = self.context.wait_timeout
        self.logger.step("Waiting for deployment to be ready")

        with self.logger.spinner(f"Waiting up to {timeout}s for {workload}"):
            self.state = self.cluster.wait_for_available(workload, timeout)

        if self.state == ReadinessState.READY:
            self.logger.success("Deployment is ready")
            return self.state

        events = self._recent_events()
        self._show_events(events)
        raise ConvergenceTimeoutError(workload, timeout, events, detail=self.cluster.wait_error)

    def _recent_events(self) -> List[ClusterEvent]:
        """Best-effort event fetch; diagnostics must not mask the timeout."""
        try:
            return self.cluster.list_events(self.context.namespace, self.context.events_limit)
        except KubeDeployError as e:
            self.logger.warning(f"Could not fetch recent events: {e.message}")
            return []

    def _show_events(self, events: List[ClusterEvent]) -> None:
        for event in events:
            self.logger.log(
                f"event {event.timestamp} {event.type} {event.reason} {event.object}: {event.message}",
                "WARNING",
            )

        if self.logger.quiet or not events:
            return

        table = Table(title="Recent events", title_justify="left", padding=(0, 1))
        table.add_column("Time", style="dim", no_wrap=True)
        table.add_column("Type")
        table.add_column("Reason", style="cyan")
        table.add_column("Object", style="yellow")
        table.add_column("Message")

        for event in events:
            type_style = "red" if event.type == "Warning" else "green"
            table.add_row(
                event.timestamp,
                f"[{type_style}]{event.type}[/{type_style}]",
                event.reason,
                event.object,
                event.message,
            )

        self.logger.console.print()
        self.logger.console.print(table)
