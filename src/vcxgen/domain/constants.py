from __future__ import annotations

"""
Domain Constants.

Centralizes MSBuild element names, the namespace of generated documents,
default extension sets and the default identifier namespace.
"""

from typing import List

APP_NAME = "vcxgen"
DEFAULT_PROJECT_NAME = "project"

# -----------------------------------------------------------------------------
# MSBUILD SCHEMA
# -----------------------------------------------------------------------------

MSBUILD_NAMESPACE = "http://schemas.microsoft.com/developer/msbuild/2003"
FILTERS_TOOLS_VERSION = "4.0"

PROJECT_TAG = "Project"
ITEM_GROUP_TAG = "ItemGroup"
COMPILE_TAG = "ClCompile"
INCLUDE_TAG = "ClInclude"
FILTER_TAG = "Filter"
UNIQUE_IDENTIFIER_TAG = "UniqueIdentifier"

INCLUDE_ATTR = "Include"
LABEL_ATTR = "Label"

SOURCES_LABEL = "Sources"
HEADERS_LABEL = "Headers"

SOURCE_FOLDER = "Source Files"
HEADER_FOLDER = "Header Files"

PROJECT_EXTENSION = ".vcxproj"
FILTERS_SUFFIX = ".filters"
FILTERS_INDENT = "  "

# -----------------------------------------------------------------------------
# CLASSIFICATION DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_SOURCE_EXTENSIONS: List[str] = [".cpp", ".cxx", ".cc", ".c"]
DEFAULT_HEADER_EXTENSIONS: List[str] = [".h", ".hpp", ".hxx", ".hh"]

# -----------------------------------------------------------------------------
# IDENTIFIERS
# -----------------------------------------------------------------------------

# Namespace for deriving filter identifiers. Changing it changes every
# UniqueIdentifier written to existing .filters files.
DEFAULT_UUID_NAMESPACE = "10758f2f-f8bc-4d6b-aeaa-8131bf78a862"
