from __future__ import annotations

"""
Release Domain Data Models.

Defines the result object handed from the release pipeline to the
interface layer, plus factory functions for its success and failure forms.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ReleaseResult:
    """
    Outcome of one release run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        renamelog: Absolute path of the rename log that was read.
        project_dir: Absolute project root searched for sources.
        environment: Deployment environment the build belongs to.
        build: Build identifier.
        dry_run: True when the upload step was skipped.
        uploaded: True when the server accepted the payload.
        summary: Counts of parsed and located elements.
    """
    ok: bool
    error: str

    renamelog: str
    project_dir: str
    environment: str
    build: str

    dry_run: bool = False
    uploaded: bool = False

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        summary_extra: Optional[Dict[str, Any]] = None,
) -> ReleaseResult:
    """
    Create a failed release result.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        summary_extra: Whatever metrics were gathered before the failure.

    Returns:
        ReleaseResult: An immutable error result object.
    """
    return ReleaseResult(
        ok=False,
        error=error,
        renamelog=cfg.get("renamelog", ""),
        project_dir=cfg.get("project_dir", ""),
        environment=cfg.get("environment", ""),
        build=cfg.get("build", ""),
        summary=summary_extra or {},
    )


def create_success_result(
        cfg: Dict[str, Any],
        *,
        dry_run: bool,
        uploaded: bool,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> ReleaseResult:
    """Create a successful release result."""
    return ReleaseResult(
        ok=True,
        error="",
        renamelog=cfg.get("renamelog", ""),
        project_dir=cfg.get("project_dir", ""),
        environment=cfg.get("environment", ""),
        build=cfg.get("build", ""),
        dry_run=dry_run,
        uploaded=uploaded,
        summary=summary_extra or {},
    )
