"""
Logging system for kubedeploy
Provides real-time logging to files with clean console output
"""

import re
from contextlib import contextmanager
from pathlib import Path
from datetime import datetime
from typing import Optional, TextIO
from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner
from rich.padding import Padding

from kubedeploy.constants import LOG_DATE_FORMAT, LOG_TIME_FORMAT

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


class DeployLogger:
    """
    Manages logging for deployment operations
    - Writes all output to log files in real-time
    - Shows clean progress UI in console (unless verbose or quiet)
    - Captures errors with context
    """

    def __init__(
        self,
        namespace: str,
        operation: str,
        log_root: Path,
        verbose: bool = False,
        quiet: bool = False,
        console: Optional[Console] = None,
    ):
        """
        Initialize logger

        Args:
            namespace: Target namespace (groups log files)
            operation: Operation name (e.g., 'deploy', 'cleanup')
            log_root: Directory under which logs are written
            verbose: If True, show all output in console
            quiet: If True, show nothing in console (JSON mode)
            console: Rich console (creates new if not provided)
        """
        self.namespace = namespace
        self.operation = operation
        self.verbose = verbose
        self.quiet = quiet
        self.console = console or Console()
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.current_step = ""
        self.has_errors = False

        # Structure: logs/{namespace}/{date}/{time}_{operation}.log
        now = datetime.now()
        logs_dir = Path(log_root) / namespace / now.strftime(LOG_DATE_FORMAT)
        logs_dir.mkdir(parents=True, exist_ok=True)

        self.log_path = logs_dir / f"{now.strftime(LOG_TIME_FORMAT)}_{operation}.log"

        # Line buffered for real-time tailing
        self.log_file = open(self.log_path, "w", buffering=1, encoding="utf-8")

        self._write_log_header()

    @property
    def _show_progress(self) -> bool:
        return not self.verbose and not self.quiet

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
kubedeploy Deployment Log
{"=" * 80}
Namespace: {self.namespace}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        timestamp = datetime.now().strftime("%H:%M:%S")
        log_line = f"[{timestamp}] [{level}] {message}\n"

        if self.log_file:
            self.log_file.write(log_line)
            self.log_file.flush()

        if self.verbose and not self.quiet:
            if level == "ERROR":
                self.console.print(f"[red]{message}[/red]")
            elif level == "WARNING":
                self.console.print(f"[yellow]{message}[/yellow]")
            elif level == "DEBUG":
                self.console.print(f"[dim]{message}[/dim]")
            else:
                self.console.print(message)

    def log_command(self, command: str):
        """Log a command being executed"""
        self.log(f"Executing: {command}", "DEBUG")

    def log_output(self, output: str, stream: str = "stdout"):
        """
        Log command output

        Always written to the log file, shown in console only if verbose.

        Args:
            output: Command output (single line or multiline)
            stream: Stream name (stdout, stderr)
        """
        if not output:
            return

        clean_output = ANSI_ESCAPE.sub("", output)

        if self.log_file:
            for line in clean_output.splitlines():
                self.log_file.write(f"  [{stream}] {line}\n")
            self.log_file.flush()

        if self.verbose and not self.quiet:
            self.console.print(output.rstrip(), markup=False, highlight=False)

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., command that failed)
        """
        self.has_errors = True

        error_block = f"""
{"!" * 80}
ERROR OCCURRED
{"!" * 80}
{error}
"""
        if context:
            error_block += f"\nContext: {context}\n"

        error_block += f"{'!' * 80}\n\n"

        if self.log_file:
            self.log_file.write(error_block)
            self.log_file.flush()

        if self.quiet:
            return

        if not self.verbose:
            self.console.print()

        self.console.print(f"[bold red]✗ {error}[/bold red]")
        if context:
            self.console.print(f"  [color(208)]{context}[/color(208)]")

    def step(self, step_name: str):
        """
        Start a new step

        Args:
            step_name: Name of the step
        """
        if self.current_step and self._show_progress:
            self.console.print()

        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

        if self._show_progress:
            self.console.print(f"[color(214)]▶[/color(214)] [white]{step_name}[/white]")

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

        if self._show_progress:
            self.console.print(f"  [dim]✓ {message}[/dim]")

    def info(self, message: str):
        """Log an informational message"""
        self.log(message, "INFO")

        if self._show_progress:
            self.console.print(f"  [dim]{message}[/dim]")

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

        if self._show_progress:
            self.console.print(f"  [yellow]⚠[/yellow] [dim]{message}[/dim]")

    @contextmanager
    def spinner(self, description: str):
        """Show a spinner while a blocking call runs (progress mode only)."""
        if not self._show_progress:
            yield
            return

        spinner = Spinner("dots", text=f"[cyan]{description}...[/cyan]")
        with Live(
            Padding(spinner, (0, 0, 0, 2)),
            console=self.console,
            refresh_per_second=10,
            transient=True,
        ):
            yield

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        """Context manager exit"""
        if exc_type is not None and exc_type not in (SystemExit, KeyboardInterrupt):
            self.has_errors = True
        self.close()
        return False

