from __future__ import annotations

"""
Project Template Section Rewriter.

Locates labelled ItemGroup sections in a decoded project template and
replaces their content with item entries generated from a file list.
The rewrite is destructive: whatever the section held before, including
its own attributes, is discarded.
"""

import logging
from typing import Dict, List, Sequence

from vcxgen.core.project.classifier import CategoryRule, Classifier
from vcxgen.core.xml.scanner import local_name_is, scan
from vcxgen.domain.constants import (
    HEADERS_LABEL,
    INCLUDE_ATTR,
    ITEM_GROUP_TAG,
    LABEL_ATTR,
    SOURCES_LABEL,
)
from vcxgen.domain.node_models import Node
from vcxgen.infra.fs import to_native_path

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# REWRITE POLICIES
# -----------------------------------------------------------------------------

def override_section(section: Node, files: Sequence[str], rule: CategoryRule) -> int:
    """
    Replace a section with one entry per file accepted by the rule.

    Entries keep input order and are not deduplicated. Each entry is
    followed by a newline Text child.

    Args:
        section: The matched grouping element, mutated in place.
        files: Candidate file paths.
        rule: Category deciding both the filter and the entry tag.

    Returns:
        int: Number of entries written.
    """
    section.clear_attributes()
    section.clear_children()

    count = 0
    for file in files:
        path = to_native_path(file)
        if not rule.matches(path):
            continue

        entry = section.add_child(rule.item_tag)
        entry.add_attribute(INCLUDE_ATTR, path)
        section.add_text("\n")
        count += 1

    return count


def override_sources(section: Node, files: Sequence[str], classifier: Classifier) -> int:
    return override_section(section, files, classifier.sources)


def override_headers(section: Node, files: Sequence[str], classifier: Classifier) -> int:
    return override_section(section, files, classifier.headers)


_POLICIES = {
    SOURCES_LABEL: override_sources,
    HEADERS_LABEL: override_headers,
}

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def rewrite_template(root: Node, files: Sequence[str], classifier: Classifier) -> Dict[str, int]:
    """
    Rewrite every labelled ItemGroup of a template tree in place.

    The policy is chosen by the value of the group's first Label
    attribute. Groups without a label, or with an unknown one, are
    left untouched.

    Args:
        root: Decoded template root.
        files: Input file paths, in the order entries should appear.
        classifier: Extension lookup.

    Returns:
        Dict[str, int]: Entries written per label. A label rewritten
                        more than once accumulates its counts.
    """
    written: Dict[str, int] = {}
    file_list: List[str] = list(files)

    def _on_item_group(group: Node) -> None:
        label = group.get_attribute(LABEL_ATTR)
        policy = _POLICIES.get(label or "")
        if policy is None:
            return
        count = policy(group, file_list, classifier)
        written[label] = written.get(label, 0) + count
        logger.debug(f"Rewrote '{label}' section with {count} entries.")

    groups = scan(root, local_name_is(ITEM_GROUP_TAG), _on_item_group)
    logger.debug(f"Visited {groups} ItemGroup sections.")

    for label in (SOURCES_LABEL, HEADERS_LABEL):
        if label not in written:
            logger.warning(f"Template has no ItemGroup labelled '{label}'.")

    return written
