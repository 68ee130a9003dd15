from __future__ import annotations

"""
Export Domain Data Models.

Defines the result object handed from the export engine to the
interface layer, along with its factory functions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ExportResult:
    """
    Unified result of a project export.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        project_name: Name of the generated project.
        template_path: Template the project file was derived from.
        project_path: Destination of the .vcxproj file.
        filters_path: Destination of the .vcxproj.filters file.
        input_files: Number of input files considered.
        sections: Entries written per rewritten template section.
        filter_entries: Number of entries in the filters document.
        filter_paths: Category paths declared in the filters document.
        existing_files: Outputs that blocked the export.
        dry_run: Whether writing was skipped.
    """
    ok: bool
    error: str

    project_name: str
    template_path: str
    project_path: str
    filters_path: str

    input_files: int = 0
    sections: Dict[str, int] = field(default_factory=dict)
    filter_entries: int = 0
    filter_paths: List[str] = field(default_factory=list)

    existing_files: List[str] = field(default_factory=list)
    dry_run: bool = False

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        project_path: str = "",
        filters_path: str = "",
        existing_files: Optional[List[str]] = None,
        dry_run: bool = False,
) -> ExportResult:
    """
    Create a failed export result instance.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        project_path: Calculated project file destination.
        filters_path: Calculated filters file destination.
        existing_files: Files that caused collision aborts.
        dry_run: Whether the run was a simulation.

    Returns:
        ExportResult: An immutable error result object.
    """
    return ExportResult(
        ok=False,
        error=error,
        project_name=cfg.get("project_name", ""),
        template_path=cfg.get("template_path", ""),
        project_path=project_path,
        filters_path=filters_path,
        existing_files=existing_files or [],
        dry_run=dry_run,
    )


def create_success_result(
        cfg: Dict[str, Any],
        template_path: str,
        project_path: str,
        filters_path: str,
        input_files: int,
        sections: Dict[str, int],
        filter_entries: int,
        filter_paths: List[str],
        dry_run: bool = False,
) -> ExportResult:
    """Create a successful export result instance."""
    return ExportResult(
        ok=True,
        error="",
        project_name=cfg.get("project_name", ""),
        template_path=template_path,
        project_path=project_path,
        filters_path=filters_path,
        input_files=input_files,
        sections=dict(sections),
        filter_entries=filter_entries,
        filter_paths=list(filter_paths),
        dry_run=dry_run,
    )
