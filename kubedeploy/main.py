#!/usr/bin/env python3
"""kubedeploy - Main entry point"""

import os
import sys

from rich.console import Console

import rich_click as click

from kubedeploy import __version__
from kubedeploy.constants import (
    DEFAULT_DOCKER,
    DEFAULT_HEALTH_CHECK_SCRIPT,
    DEFAULT_IMAGE_TAG,
    DEFAULT_KUBECTL,
    DEFAULT_MANIFEST_DIR,
    DEFAULT_NAMESPACE,
    DEFAULT_OPERATION,
    DEFAULT_WAIT_TIMEOUT,
    ENVIRONMENT_VARIABLES,
)
from kubedeploy.dispatcher import dispatch, resolve_operation
from kubedeploy.exceptions import KubeDeployError, UsageError
from kubedeploy.models.context import DeploymentContext
from kubedeploy.ui_components import BANNER
from kubedeploy.utils import env_flag, load_env_file

# Configure rich-click
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100

# COMMANDS: Bold cyan
click.rich_click.STYLE_COMMAND = "bold cyan"

# OPTIONS: Bold magenta
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_ARGUMENT = "bold yellow"

# HEADERS: Bold cyan
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_USAGE_COMMAND = "bold cyan"

# HELP TEXT
click.rich_click.STYLE_HELPTEXT_FIRST_LINE = "bold white"
click.rich_click.STYLE_HELPTEXT = ""
click.rich_click.STYLE_OPTION_HELP = ""

# METAVARS: Yellow
click.rich_click.STYLE_METAVAR = "bold yellow"
click.rich_click.STYLE_OPTION_DEFAULT = "dim cyan"
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"

# ALIGNMENT
click.rich_click.ALIGN_OPTIONS_PANEL = "left"
click.rich_click.ALIGN_ERRORS_PANEL = "left"
click.rich_click.ERRORS_EPILOGUE = ""

console = Console()

OPERATION_HELP = [
    ("deploy", "Deploy the application (default)"),
    ("cleanup", "Remove the deployment"),
    ("verify", "Verify existing deployment"),
    ("info", "Show deployment information"),
]


def print_usage(error: UsageError = None) -> None:
    """Print operations and recognized environment variables."""
    if error:
        console.print(f"\n[bold red]✗ Error:[/bold red] {error.message}")

    console.print(BANNER)
    console.print("[bold yellow]Usage:[/bold yellow] kubedeploy \\[OPTIONS] \\[deploy|cleanup|verify|info]\n")

    console.print("[bold cyan]Commands:[/bold cyan]")
    for name, description in OPERATION_HELP:
        console.print(f"  [cyan]{name:<8}[/cyan] - {description}")

    console.print("\n[bold cyan]Environment variables:[/bold cyan]")
    width = max(len(name) for name, _ in ENVIRONMENT_VARIABLES)
    for name, description in ENVIRONMENT_VARIABLES:
        console.print(f"  [magenta]{name:<{width}}[/magenta] - {description}")
    console.print()


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""
    import functools
    from click.exceptions import ClickException

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ClickException as e:
            # Click's built-in exceptions (already formatted)
            e.show()
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except KubeDeployError as e:
            console.print(f"\n[bold red]✗ Error:[/bold red] {e.message}")
            if e.context:
                console.print(f"  [color(208)]{e.context}[/color(208)]")
            sys.exit(1)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")

            # Show traceback if DEBUG env var is set
            if os.environ.get("DEBUG"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


@click.command(name="kubedeploy", context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("operation", required=False, default=DEFAULT_OPERATION)
@click.option(
    "-n", "--namespace", envvar="NAMESPACE", default=DEFAULT_NAMESPACE, show_default=True,
    help="Kubernetes namespace",
)
@click.option("--context", "cluster_context", envvar="KUBE_CONTEXT", help="Kubernetes context to use")
@click.option("--dry-run", is_flag=True, help="Validate manifests client-side only [env: DRY_RUN]")
@click.option("--skip-build", is_flag=True, help="Skip the Docker build step [env: SKIP_BUILD]")
@click.option("--image-tag", envvar="IMAGE_TAG", default=DEFAULT_IMAGE_TAG, show_default=True, help="Docker image tag")
@click.option("--registry", envvar="REGISTRY", help="Docker registry to push to")
@click.option(
    "--manifest-dir", envvar="MANIFEST_DIR", default=DEFAULT_MANIFEST_DIR, show_default=True,
    help="Directory holding the manifests",
)
@click.option(
    "--timeout", "wait_timeout", envvar="WAIT_TIMEOUT", type=click.IntRange(min=1),
    default=DEFAULT_WAIT_TIMEOUT, show_default=True, help="Seconds to wait for readiness",
)
@click.option(
    "--health-check", envvar="HEALTH_CHECK_SCRIPT", default=DEFAULT_HEALTH_CHECK_SCRIPT,
    show_default=True, help="Health probe script",
)
@click.option("--strict", is_flag=True, help="Fail when the health probe fails [env: STRICT_VERIFY]")
@click.option("--kubectl", envvar="KUBECTL", default=DEFAULT_KUBECTL, hidden=True)
@click.option("--docker", envvar="DOCKER", default=DEFAULT_DOCKER, hidden=True)
@click.option("-v", "--verbose", is_flag=True, help="Show all command output")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.version_option(version=__version__, prog_name="kubedeploy")
def cli(
    operation,
    namespace,
    cluster_context,
    dry_run,
    skip_build,
    image_tag,
    registry,
    manifest_dir,
    wait_timeout,
    health_check,
    strict,
    kubectl,
    docker,
    verbose,
    json_output,
):
    """
    Deploy the Bingo gRPC service to Kubernetes.

    \b
    Operations:
      deploy   Check, build, apply, wait, verify and report (default)
      cleanup  Delete every manifest in reverse order (alias: clean)
      verify   Verify an existing deployment
      info     Show deployment information

    \b
    Examples:
      kubedeploy                         # Deploy with defaults
      DRY_RUN=true kubedeploy deploy     # Validate manifests only
      kubedeploy -n staging cleanup      # Tear down a namespace
      kubedeploy info --json             # Machine-readable report
    """
    try:
        operation = resolve_operation(operation)
    except UsageError as e:
        print_usage(e)
        raise SystemExit(1)

    try:
        context = DeploymentContext(
            namespace=namespace,
            cluster_context=cluster_context,
            dry_run=dry_run or env_flag("DRY_RUN"),
            skip_build=skip_build or env_flag("SKIP_BUILD"),
            image_tag=image_tag,
            registry=registry,
            manifest_dir=manifest_dir,
            wait_timeout=wait_timeout,
            health_check_script=health_check,
            strict_verify=strict or env_flag("STRICT_VERIFY"),
            kubectl=kubectl,
            docker=docker,
        )
    except ValueError as e:
        console.print(f"\n[bold red]✗ Invalid value:[/bold red] {e}\n")
        raise SystemExit(1)

    dispatch(operation, context, verbose=verbose, json_output=json_output)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    load_env_file()
    cli()


if __name__ == "__main__":
    main()
