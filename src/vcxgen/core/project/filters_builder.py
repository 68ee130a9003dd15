from __future__ import annotations

"""
Filter Hierarchy Builder.

Synthesizes the .filters companion document of a project. Every input
file is placed under a category path made of its top-level folder
('Source Files' / 'Header Files') and its directory relative to the
project root. Each distinct category path, including every ancestor, is
declared once with a UniqueIdentifier derived from a UUID namespace, so
regenerating the document never changes identifiers of existing folders.
"""

import logging
import os
import uuid
from typing import Iterable, List, Optional, Sequence, Union

from vcxgen.core.project.classifier import Classifier
from vcxgen.domain.constants import (
    FILTER_TAG,
    FILTERS_TOOLS_VERSION,
    INCLUDE_ATTR,
    ITEM_GROUP_TAG,
    MSBUILD_NAMESPACE,
    PROJECT_TAG,
    UNIQUE_IDENTIFIER_TAG,
)
from vcxgen.domain.errors import NamespaceParseError, PathResolutionError
from vcxgen.domain.node_models import Node, QName
from vcxgen.infra.fs import to_native_path

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# IDENTIFIERS
# -----------------------------------------------------------------------------

def parse_namespace(value: Union[str, uuid.UUID]) -> uuid.UUID:
    """
    Parse the identifier namespace.

    Raises:
        NamespaceParseError: If the value is not a valid UUID.
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except ValueError as e:
        raise NamespaceParseError(f"Invalid UUID namespace '{value}': {e}") from e


def stable_identifier(namespace: uuid.UUID, path: str) -> str:
    """Return the brace-delimited name-based (SHA-1) UUID of a category path."""
    return "{" + str(uuid.uuid5(namespace, path)) + "}"

# -----------------------------------------------------------------------------
# CATEGORY PATHS
# -----------------------------------------------------------------------------

def relative_directory(file: str, root_dir: str) -> str:
    """
    Compute the directory of a file relative to the project root.

    Relative file paths are taken relative to the root itself.

    Args:
        file: File path, with either separator style.
        root_dir: Project root directory.

    Returns:
        str: Relative directory using the platform separator, or an empty
             string when the file sits directly in the root.

    Raises:
        PathResolutionError: If the file lies outside the root, or the two
                             paths share no common base (e.g. drives).
    """
    root_abs = os.path.abspath(root_dir)
    file_dir = os.path.dirname(to_native_path(file))
    dir_abs = os.path.abspath(os.path.join(root_abs, file_dir))

    try:
        rel = os.path.relpath(dir_abs, root_abs)
    except ValueError as e:
        raise PathResolutionError(f"Cannot relate '{file}' to '{root_abs}': {e}") from e

    if rel == os.curdir:
        return ""
    if rel == os.pardir or rel.startswith(os.pardir + os.sep):
        raise PathResolutionError(f"'{file}' is outside of '{root_abs}'")
    return rel


def _directory_parts(rel_dir: str) -> List[str]:
    return [p for p in rel_dir.split(os.sep) if p]


def category_path(folder: str, rel_dir: str, separator: str) -> str:
    """Join a top-level folder with a relative directory."""
    return separator.join([folder] + _directory_parts(rel_dir))


def ancestor_paths(folder: str, rel_dir: str, separator: str) -> List[str]:
    """
    List the category path of a directory followed by each of its ancestors.

    The walk stops at the top-level folder, which is never split, so a
    separator that occurs inside the folder name cannot invent a parent.
    Folder 'A' with directory 'B/C' yields ['A/B/C', 'A/B', 'A'].
    """
    segments = [folder] + _directory_parts(rel_dir)
    return [separator.join(segments[:n]) for n in range(len(segments), 0, -1)]

# -----------------------------------------------------------------------------
# FILTER DECLARATIONS
# -----------------------------------------------------------------------------

def path_attribute(declaration: Node) -> Optional[str]:
    """
    Return the path-identifying attribute of a filter declaration.

    That attribute is, by definition, the first one in insertion order.
    Declarations must therefore always be created with Include first,
    otherwise duplicate detection stops recognizing them.
    """
    if not declaration.attributes:
        return None
    return declaration.attributes[0].value


def has_filter(filters: Node, path: str) -> bool:
    """Linear scan for a declaration whose path-identifying attribute equals path."""
    for declaration in filters.elements():
        if path_attribute(declaration) == path:
            return True
    return False


def declare_filter(filters: Node, path: str, namespace: uuid.UUID) -> Node:
    """Append a filter declaration for a category path."""
    declaration = filters.add_child(FILTER_TAG)
    declaration.add_attribute(INCLUDE_ATTR, path)
    identifier = declaration.add_child(UNIQUE_IDENTIFIER_TAG)
    identifier.add_text(stable_identifier(namespace, path))
    return declaration

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def new_filters_document() -> Node:
    """Create the empty document root of a .filters file."""
    project = Node(QName(PROJECT_TAG, MSBUILD_NAMESPACE))
    project.add_attribute("ToolsVersion", FILTERS_TOOLS_VERSION)
    return project


def build_filters_document(
        files: Iterable[str],
        *,
        root_dir: str,
        uuid_namespace: Union[str, uuid.UUID],
        classifier: Classifier,
        separator: str = os.sep,
) -> Node:
    """
    Build the filter hierarchy document for a list of files.

    The root holds two ItemGroups: filter declarations first, then one
    entry per file. Files whose directory cannot be related to root_dir,
    and files of unrecognized type, are skipped.

    Args:
        files: Input file paths in output order.
        root_dir: Directory that category paths are relative to.
        uuid_namespace: Namespace for identifier derivation.
        classifier: Extension lookup.
        separator: Separator placed between category path segments.

    Returns:
        Node: Root of the new document.

    Raises:
        NamespaceParseError: If uuid_namespace is not a valid UUID. Nothing
                             is built in that case.
    """
    namespace = parse_namespace(uuid_namespace)

    project = new_filters_document()
    filters = project.add_child(ITEM_GROUP_TAG)
    entries = project.add_child(ITEM_GROUP_TAG)

    for file in files:
        path = to_native_path(file)
        try:
            rel_dir = relative_directory(path, root_dir)
        except PathResolutionError as e:
            logger.debug(f"Skipping file: {e}")
            continue

        rule = classifier.classify(path)
        if rule is None:
            logger.debug(f"Skipping unrecognized file type: {path}")
            continue

        name = category_path(rule.folder, rel_dir, separator)

        entry = entries.add_child(rule.item_tag)
        entry.add_attribute(INCLUDE_ATTR, path)
        entry.add_child(FILTER_TAG).add_text(name)

        for ancestor in ancestor_paths(rule.folder, rel_dir, separator):
            if not has_filter(filters, ancestor):
                declare_filter(filters, ancestor, namespace)

    return project


def declared_paths(document: Node) -> Sequence[str]:
    """Return the category paths declared by a filters document, in order."""
    groups = list(document.elements())
    if not groups:
        return []
    return [p for p in (path_attribute(d) for d in groups[0].elements()) if p is not None]
