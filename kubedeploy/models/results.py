"""
Result Models

Dataclass models for operation results and command outputs.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from enum import Enum


class OutcomeStatus(Enum):
    """Status of a single resource or action."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class OperationOutcome:
    """Outcome of applying, deleting, building or pushing one unit."""

    name: str
    status: OutcomeStatus
    detail: Optional[str] = None

    @classmethod
    def success(cls, name: str, detail: Optional[str] = None) -> "OperationOutcome":
        return cls(name, OutcomeStatus.SUCCESS, detail)

    @classmethod
    def skipped(cls, name: str, reason: str) -> "OperationOutcome":
        return cls(name, OutcomeStatus.SKIPPED, reason)

    @classmethod
    def failed(cls, name: str, cause: str) -> "OperationOutcome":
        return cls(name, OutcomeStatus.FAILED, cause)

    @property
    def is_success(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS

    @property
    def is_skipped(self) -> bool:
        return self.status == OutcomeStatus.SKIPPED

    @property
    def is_failure(self) -> bool:
        return self.status == OutcomeStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "status": self.status.value, "detail": self.detail}


@dataclass
class StageReport:
    """Ordered outcomes of one stage (apply, teardown, build)."""

    stage: str
    outcomes: List[OperationOutcome] = field(default_factory=list)

    def record(self, outcome: OperationOutcome) -> OperationOutcome:
        """Append an outcome and return it."""
        self.outcomes.append(outcome)
        return outcome

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == status)

    @property
    def succeeded(self) -> int:
        return self._count(OutcomeStatus.SUCCESS)

    @property
    def skipped(self) -> int:
        return self._count(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(OutcomeStatus.FAILED)

    @property
    def names(self) -> List[str]:
        return [outcome.name for outcome in self.outcomes]

    def summary_line(self) -> str:
        """One-line count summary for console output."""
        parts = [f"{self.succeeded} succeeded"]
        if self.skipped:
            parts.append(f"{self.skipped} skipped")
        if self.failed:
            parts.append(f"{self.failed} failed")
        return ", ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage,
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
        }

    def __repr__(self) -> str:
        return f"StageReport(stage={self.stage}, {self.summary_line()})"


@dataclass
class ExecutionResult:
    """Result of a command execution (subprocess)."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    command: str = ""

    @property
    def is_success(self) -> bool:
        """Check if execution succeeded."""
        return self.returncode == 0

    @property
    def is_failure(self) -> bool:
        """Check if execution failed."""
        return self.returncode != 0

    @property
    def output(self) -> str:
        """Get combined output (stdout + stderr)."""
        return f"{self.stdout}\n{self.stderr}".strip()

    def __repr__(self) -> str:
        return f"ExecutionResult(returncode={self.returncode}, command='{self.command[:50]}...')"
