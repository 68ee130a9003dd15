from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the raw
argparse namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the vcxgen CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="vcxgen",
        description="Generate a Visual C++ project (.vcxproj) and its filters from a list of source files.",
    )

    # --- Input Files ---
    p.add_argument(
        "files",
        nargs="*",
        help="Source and header files to include, in output order.",
    )
    p.add_argument(
        "--files-from",
        dest="files_from",
        action="append",
        default=[],
        metavar="LIST",
        help="Read additional file paths from LIST, one per line ('-' for stdin). Repeatable.",
    )
    p.add_argument(
        "--scan",
        dest="scan_dirs",
        action="append",
        default=[],
        metavar="DIR",
        help="Walk DIR and add every recognized source and header file. Repeatable.",
    )

    # --- Project Layout ---
    p.add_argument(
        "-o", "--output-dir",
        dest="output_dir",
        default=None,
        help="Directory receiving the generated files.",
    )
    p.add_argument(
        "-n", "--name",
        dest="project_name",
        default=None,
        help="Project name; output is <name>.vcxproj and <name>.vcxproj.filters.",
    )
    p.add_argument(
        "--template",
        dest="template_path",
        default=None,
        help="Project template to rewrite instead of the bundled one.",
    )
    p.add_argument(
        "--root",
        dest="root_dir",
        default=None,
        help="Directory that filter folders are relative to.",
    )

    # --- Filter Hierarchy ---
    p.add_argument(
        "--uuid-namespace",
        dest="uuid_namespace",
        default=None,
        help="UUID namespace used to derive filter identifiers.",
    )
    p.add_argument(
        "--filter-separator",
        dest="filter_separator",
        default=None,
        help="Separator between filter folder levels (default: platform separator).",
    )

    # --- Classification and Discovery ---
    p.add_argument(
        "--source-ext",
        dest="source_extensions",
        default=None,
        help="Comma-separated compile unit extensions, e.g. '.cpp,.cxx'.",
    )
    p.add_argument(
        "--header-ext",
        dest="header_extensions",
        default=None,
        help="Comma-separated header extensions, e.g. '.h,.hpp'.",
    )
    p.add_argument(
        "--exclude",
        dest="exclude_patterns",
        default=None,
        help="Comma-separated regexes of names skipped by --scan.",
    )
    p.add_argument(
        "--no-gitignore",
        action="store_true",
        help="Ignore .gitignore rules while scanning.",
    )

    # --- Runtime Constraints and Safety ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON configuration file (default: ./vcxgen.json when present).",
    )
    p.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace existing output files.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Build both documents without writing them.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the export result as JSON.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Options that were not given map to None and are ignored by the merge.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["output_dir"] = args.output_dir
    overrides["project_name"] = args.project_name
    overrides["template_path"] = args.template_path
    overrides["root_dir"] = args.root_dir
    overrides["uuid_namespace"] = args.uuid_namespace
    overrides["filter_separator"] = args.filter_separator

    overrides["source_extensions"] = _split_csv(args.source_extensions)
    overrides["header_extensions"] = _split_csv(args.header_extensions)
    overrides["exclude_patterns"] = _split_csv(args.exclude_patterns)

    if args.no_gitignore:
        overrides["respect_gitignore"] = False
    if args.overwrite:
        overrides["overwrite"] = True

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of sanitized strings."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
