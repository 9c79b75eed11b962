from __future__ import annotations

"""
Runner Domain Data Models.

Defines the result structure and factory functions used to communicate
the outcome of an invocation between the runner core and the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from sonar_runner.domain.project_models import ProjectDefinition

MODE_CURRENT = "current"
MODE_LEGACY = "legacy"
MODE_DRY_RUN = "dry-run"

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RunnerResult:
    """
    Outcome of a complete runner invocation.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        mode: Engine call style used (current, legacy or dry-run).
        project: Root project definition, when the build succeeded.
        properties: Final property bag handed to the engine.
        summary: Technical execution summary.
    """
    ok: bool
    error: str
    mode: str
    project: Optional[ProjectDefinition] = None
    properties: Dict[str, str] = field(default_factory=dict)
    summary: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "error": self.error,
            "mode": self.mode,
            "project": self.project.to_dict() if self.project else None,
            "summary": dict(self.summary),
        }

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        mode: str,
        properties: Dict[str, str],
        summary_extra: Optional[Dict[str, Any]] = None
) -> RunnerResult:
    """
    Create a failed runner result instance.

    Args:
        error: Detailed error description.
        mode: Engine call style that was requested.
        properties: Raw properties of the failed run.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        RunnerResult: An immutable error result object.
    """
    return RunnerResult(
        ok=False,
        error=error,
        mode=mode,
        properties=dict(properties),
        summary=summary_extra or {},
    )


def create_success_result(
        project: ProjectDefinition,
        mode: str,
        properties: Dict[str, str],
        summary_extra: Optional[Dict[str, Any]] = None
) -> RunnerResult:
    """
    Create a successful runner result instance.

    Args:
        project: Validated root project definition.
        mode: Engine call style used.
        properties: Final properties handed to the engine.
        summary_extra: Execution metrics.

    Returns:
        RunnerResult: An immutable success result object.
    """
    return RunnerResult(
        ok=True,
        error="",
        mode=mode,
        project=project,
        properties=dict(properties),
        summary=summary_extra or {},
    )
