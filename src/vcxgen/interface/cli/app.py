from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration
resolution (defaults, JSON file, command-line overrides), input file
collection, export execution and result rendering.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from vcxgen.core.pipeline.engine import export_project
from vcxgen.core.pipeline.validator import validate_config
from vcxgen.core.project.classifier import Classifier
from vcxgen.core.services.discovery import collect_input_files
from vcxgen.domain.config import find_local_config, load_config_file
from vcxgen.domain.errors import ConfigError
from vcxgen.domain.export_models import ExportResult
from vcxgen.infra.logging import LoggingConfig, configure_logging, get_logger
from vcxgen.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 export failure, 2 usage error).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    configure_logging(LoggingConfig.for_cli(args.debug, args.log_file))

    # 3. Resolve configuration hierarchy
    config_path = args.config_file or find_local_config(os.getcwd())
    base_conf: Dict[str, Any] = {}
    if config_path:
        try:
            base_conf = load_config_file(config_path)
        except ConfigError as e:
            logger.error(str(e))
            print(f"ERROR: {e}", file=sys.stderr)
            return EXIT_USAGE

    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Input collection phase
    classifier = Classifier(clean_conf["source_extensions"], clean_conf["header_extensions"])
    try:
        files = collect_input_files(
            args.files,
            args.files_from,
            args.scan_dirs,
            classifier=classifier,
            exclude_patterns=clean_conf["exclude_patterns"],
            respect_gitignore=clean_conf["respect_gitignore"],
        )
    except OSError as e:
        logger.error(f"Cannot read file list: {e}")
        print(f"ERROR: Cannot read file list: {e}", file=sys.stderr)
        return EXIT_USAGE

    if not files:
        msg = "No input files given. Pass paths, --files-from or --scan."
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_USAGE

    logger.info(f"Exporting {len(files)} input files as '{clean_conf['project_name']}'.")

    # 5. Export phase
    try:
        result = export_project(clean_conf, files, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        logger.warning("Export interrupted by user.")
        return 130

    # 6. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return EXIT_OK if result.ok else EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of override values into the base configuration.

    Overrides set to None (options not given) leave the base untouched.
    """
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: ExportResult) -> None:
    """Format and print the export result to standard output."""
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        for path in result.existing_files:
            print(f"  - exists: {path}", file=sys.stderr)
        return

    if result.dry_run:
        print("Dry run completed. Nothing was written.")
    else:
        print("Project generated.")
        print(f"  - project: {result.project_path}")
        print(f"  - filters: {result.filters_path}")

    print(f"Input files: {result.input_files}")
    for label, count in result.sections.items():
        print(f"  - {label}: {count} entries")
    print(f"Filter folders: {len(result.filter_paths)}")


if __name__ == "__main__":
    sys.exit(main())
