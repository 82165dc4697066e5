"""Read-only presentation of live deployment state."""

from typing import Any, Callable, Dict, List

from rich.table import Table

from kubedeploy.constants import REPORT_SECTIONS, DEFAULT_GRPC_PORT
from kubedeploy.exceptions import KubeDeployError
from kubedeploy.logger import DeployLogger
from kubedeploy.models.cluster import PodStatus
from kubedeploy.models.context import DeploymentContext


def _pod_row(item: Dict[str, Any]) -> Dict[str, Any]:
    pod = PodStatus.from_item(item)
    containers = item.get("status", {}).get("containerStatuses") or []
    ready = sum(1 for c in containers if c.get("ready"))
    return {
        "name": pod.name,
        "ready": f"{ready}/{len(containers)}",
        "status": pod.phase,
        "restarts": pod.restarts,
        "ip": pod.ip or "<none>",
        "node": pod.node or "<none>",
    }


def _service_row(item: Dict[str, Any]) -> Dict[str, Any]:
    spec = item.get("spec", {})
    ports = [
        f"{p.get('port')}/{p.get('protocol', 'TCP')}" for p in spec.get("ports") or []
    ]
    return {
        "name": item.get("metadata", {}).get("name", ""),
        "type": spec.get("type", ""),
        "cluster_ip": spec.get("clusterIP") or "<none>",
        "ports": ",".join(ports) or "<none>",
    }


def _ingress_row(item: Dict[str, Any]) -> Dict[str, Any]:
    rules = item.get("spec", {}).get("rules") or []
    balancer = item.get("status", {}).get("loadBalancer", {}).get("ingress") or []
    addresses = [entry.get("ip") or entry.get("hostname") for entry in balancer]
    return {
        "name": item.get("metadata", {}).get("name", ""),
        "hosts": ",".join(rule.get("host", "*") for rule in rules) or "*",
        "address": ",".join(a for a in addresses if a) or "<pending>",
    }


def _hpa_row(item: Dict[str, Any]) -> Dict[str, Any]:
    spec = item.get("spec", {})
    target = spec.get("scaleTargetRef", {})
    return {
        "name": item.get("metadata", {}).get("name", ""),
        "reference": f"{target.get('kind', '')}/{target.get('name', '')}",
        "min": spec.get("minReplicas", 1),
        "max": spec.get("maxReplicas", ""),
        "replicas": item.get("status", {}).get("currentReplicas", 0),
    }


ROW_BUILDERS: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    "pods": _pod_row,
    "services": _service_row,
    "ingress": _ingress_row,
    "hpa": _hpa_row,
}


class Reporter:
    """
    Prints pods, services, ingresses and autoscalers plus operational hints.

    Never mutates the cluster and never fails: a sub-query that errors is
    shown as empty.
    """

    def __init__(self, context: DeploymentContext, cluster, logger: DeployLogger):
        self.context = context
        self.cluster = cluster
        self.logger = logger

    def collect(self) -> Dict[str, List[Dict[str, Any]]]:
        """Rows per section, keyed by kubectl kind."""
        sections = {}
        for _, kind in REPORT_SECTIONS:
            try:
                items = self.cluster.list_resources(kind, self.context.selector)
            except KubeDeployError as e:
                self.logger.log(f"Could not list {kind}: {e.message}", "WARNING")
                items = []
            sections[kind] = [ROW_BUILDERS[kind](item) for item in items]
        return sections

    def hints(self) -> Dict[str, List[str]]:
        ns = self.context.namespace
        app = self.context.app_name
        return {
            "monitor": [
                f"kubectl logs -f deployment/{app} -n {ns}",
                f"kubectl get pods -l {self.context.selector} -n {ns} -w",
            ],
            "health": [
                f"kubectl port-forward svc/{self.context.service_name} "
                f"{DEFAULT_GRPC_PORT}:{DEFAULT_GRPC_PORT} -n {ns}",
                f"grpc_health_probe -addr=localhost:{DEFAULT_GRPC_PORT}",
            ],
        }

    def report(self) -> Dict[str, Any]:
        """
        Collect and print the report.

        Returns:
            Sections and hints (empty under dry-run)
        """
        if self.context.dry_run:
            return {}

        sections = self.collect()
        hints = self.hints()

        if not self.logger.quiet:
            self._print(sections, hints)

        return {"namespace": self.context.namespace, "resources": sections, "hints": hints}

    def _print(self, sections: Dict[str, List[Dict[str, Any]]], hints: Dict[str, List[str]]) -> None:
        console = self.logger.console
        console.print()
        console.print("[bold cyan]━━━ Deployment Information ━━━[/bold cyan]")

        for title, kind in REPORT_SECTIONS:
            rows = sections.get(kind, [])
            console.print()
            if not rows:
                console.print(f"[bold]{title}:[/bold] [dim]none found[/dim]")
                continue

            table = Table(title=f"{title}", title_justify="left", padding=(0, 1))
            for column in rows[0]:
                table.add_column(column.upper().replace("_", "-"), no_wrap=column == "name")
            for row in rows:
                table.add_row(*[str(value) for value in row.values()])
            console.print(table)

        console.print()
        console.print("[cyan]To monitor the deployment:[/cyan]")
        for command in hints["monitor"]:
            console.print(f"  [dim]{command}[/dim]")

        console.print()
        console.print("[cyan]To check service health:[/cyan]")
        for command in hints["health"]:
            console.print(f"  [dim]{command}[/dim]")
