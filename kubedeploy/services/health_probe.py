"""External health probe invocation."""

import os
import subprocess
from pathlib import Path
from typing import List, Optional

from kubedeploy.constants import DEFAULT_HEALTH_CHECK_TIMEOUT
from kubedeploy.logger import DeployLogger
from kubedeploy.models.cluster import ProbeResult


class HealthProbe:
    """
    Runs a local health-check script.

    Exit code 0 means healthy, anything else unhealthy. A missing script
    means no check is available.
    """

    def __init__(
        self,
        script: Optional[Path],
        timeout: int = DEFAULT_HEALTH_CHECK_TIMEOUT,
        logger: Optional[DeployLogger] = None,
    ):
        self.script = Path(script) if script else None
        self.timeout = timeout
        self.logger = logger

    def is_available(self) -> bool:
        return self.script is not None and self.script.is_file()

    def _command(self) -> List[str]:
        if self.script.suffix == ".sh" or not os.access(self.script, os.X_OK):
            return ["bash", str(self.script)]
        return [str(self.script)]

    def run(self) -> ProbeResult:
        if not self.is_available():
            return ProbeResult.UNAVAILABLE

        cmd = self._command()
        if self.logger:
            self.logger.log_command(" ".join(cmd))

        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            if self.logger:
                self.logger.log(f"Health probe timed out after {self.timeout}s", "WARNING")
            return ProbeResult.UNHEALTHY
        except OSError as e:
            if self.logger:
                self.logger.log(f"Health probe could not start: {e}", "WARNING")
            return ProbeResult.UNHEALTHY

        if self.logger:
            self.logger.log_output(result.stdout, "stdout")
            self.logger.log_output(result.stderr, "stderr")

        return ProbeResult.HEALTHY if result.returncode == 0 else ProbeResult.UNHEALTHY
