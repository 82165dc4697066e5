"""
kubedeploy - UI Components & Branding
Standardized headers and UI elements
"""

from rich.console import Console

LOGO = "kubedeploy"

# Color scheme
BRAND_COLOR = "cyan"

BANNER = """
[bold cyan]Bingo RETE Rules Engine - Kubernetes Deployment[/bold cyan]
[cyan]==============================================[/cyan]
"""


def show_header(
    title: str,
    subtitle: str = None,
    namespace: str = None,
    details: dict = None,
    console: Console = None,
):
    """
    Display a standardized kubedeploy command header.

    Args:
        title: Main title (e.g., "Deploy", "Cleanup")
        subtitle: Optional subtitle line
        namespace: Target namespace (if applicable)
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Deploy",
            namespace="bingo",
            details={"Image": "bingo-grpc:latest", "Dry run": "no"}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold color(214)]{LOGO}[/bold color(214)] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{title}[/bold white]")

    if subtitle:
        console.print(f"{prefix} [dim]{subtitle}[/dim]")

    if namespace:
        console.print(f"{prefix} Namespace: [{BRAND_COLOR}]{namespace}[/{BRAND_COLOR}]")

    if details:
        for key, value in details.items():
            console.print(f"{prefix} {key}: [{BRAND_COLOR}]{value}[/{BRAND_COLOR}]")

    console.print()
