from __future__ import annotations

"""
Core export orchestration.

This module coordinates the project generation workflow:
1. Validates configuration and resolves paths.
2. Checks for overwrite conflicts.
3. Decodes the template and rewrites its labelled sections.
4. Builds the filter hierarchy document.
5. Encodes and writes both documents.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Sequence

from vcxgen.core.pipeline.validator import validate_config
from vcxgen.core.project.classifier import Classifier
from vcxgen.core.project.filters_builder import build_filters_document, declared_paths
from vcxgen.core.project.rewriter import rewrite_template
from vcxgen.core.xml.codec import decode, encode_to
from vcxgen.domain.constants import FILTERS_INDENT
from vcxgen.domain.errors import VcxgenError
from vcxgen.domain.export_models import (
    ExportResult,
    create_error_result,
    create_success_result,
)
from vcxgen.domain.node_models import Node
from vcxgen.infra.fs import (
    check_existing_output_files,
    get_default_template_path,
    get_output_paths,
    normalize_path,
    read_template,
    safe_mkdir,
    write_file,
)

logger = logging.getLogger(__name__)


def export_project(
        config: Optional[Dict[str, Any]],
        files: Sequence[str],
        *,
        dry_run: bool = False,
) -> ExportResult:
    """
    Generate a .vcxproj and its .filters companion from a file list.

    Any codec, filesystem or namespace failure aborts the export and is
    reported in the returned result. The project file may already be
    written when the filters step fails.

    Args:
        config: The configuration dictionary (raw or partial).
        files: Input file paths, in the order entries should appear.
        dry_run: If True, build both documents without writing them.

    Returns:
        ExportResult: Object containing status and statistics.
    """
    logger.info("Project export started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    cwd = os.getcwd()
    output_dir = normalize_path(cfg["output_dir"], cwd)
    root_dir = normalize_path(cfg["root_dir"], cwd)
    template_path = (
        normalize_path(cfg["template_path"], cwd) if cfg["template_path"] else get_default_template_path()
    )
    project_path, filters_path = get_output_paths(output_dir, cfg["project_name"])
    classifier = Classifier(cfg["source_extensions"], cfg["header_extensions"])
    file_list: List[str] = list(files)

    # -------------------------------------------------------------------------
    # 2) Overwrite Check
    # -------------------------------------------------------------------------
    existing = check_existing_output_files([project_path, filters_path])
    if existing and not cfg["overwrite"] and not dry_run:
        msg = "Existing files detected and overwrite=False. Aborting."
        logger.warning(f"{msg} Files: {existing}")
        return create_error_result(msg, cfg, project_path, filters_path, existing)

    # -------------------------------------------------------------------------
    # 3) Build Documents
    # -------------------------------------------------------------------------
    try:
        project = decode(read_template(template_path))
        sections = rewrite_template(project, file_list, classifier)

        filters = build_filters_document(
            file_list,
            root_dir=root_dir,
            uuid_namespace=cfg["uuid_namespace"],
            classifier=classifier,
            separator=cfg["filter_separator"],
        )
    except VcxgenError as e:
        logger.error(f"Export aborted: {e}")
        return create_error_result(str(e), cfg, project_path, filters_path, dry_run=dry_run)

    filter_paths = list(declared_paths(filters))
    filter_entries = _count_entries(filters)

    # -------------------------------------------------------------------------
    # 4) Persistence
    # -------------------------------------------------------------------------
    if dry_run:
        logger.info("Dry run: Skipping project file deployment.")
    else:
        ok, err = safe_mkdir(output_dir)
        if not ok:
            msg = f"Failed to create output directory {output_dir}: {err}"
            logger.critical(msg)
            return create_error_result(msg, cfg, project_path, filters_path)

        try:
            write_file(project_path, lambda sink: encode_to(project, sink, xml_declaration=True))
            logger.info(f"Project written to: {project_path}")

            write_file(
                filters_path,
                lambda sink: encode_to(filters, sink, indent=FILTERS_INDENT, xml_declaration=True),
            )
            logger.info(f"Filters written to: {filters_path}")
        except VcxgenError as e:
            logger.error(f"Export aborted: {e}")
            return create_error_result(str(e), cfg, project_path, filters_path)

    logger.info("Project export completed successfully.")
    return create_success_result(
        cfg,
        template_path,
        project_path,
        filters_path,
        input_files=len(file_list),
        sections=sections,
        filter_entries=filter_entries,
        filter_paths=filter_paths,
        dry_run=dry_run,
    )


def _count_entries(filters: Node) -> int:
    groups = list(filters.elements())
    if len(groups) < 2:
        return 0
    return sum(1 for _ in groups[1].elements())
