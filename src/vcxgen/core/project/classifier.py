from __future__ import annotations

"""
File Classification Engine.

Maps source file paths to MSBuild item categories by extension. A file
is either a compile unit, a header, or unrecognized; unrecognized files
are left out of every generated document.
"""

import os
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from vcxgen.domain.constants import (
    COMPILE_TAG,
    DEFAULT_HEADER_EXTENSIONS,
    DEFAULT_SOURCE_EXTENSIONS,
    HEADER_FOLDER,
    INCLUDE_TAG,
    SOURCE_FOLDER,
)

# -----------------------------------------------------------------------------
# CATEGORY MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CategoryRule:
    """
    One file category of a C/C++ project.

    Attributes:
        folder: Top-level filter folder, e.g. 'Source Files'.
        item_tag: MSBuild item element name, e.g. 'ClCompile'.
        extensions: Lower-case extensions, dot included.
    """
    folder: str
    item_tag: str
    extensions: FrozenSet[str]

    def matches(self, path: str) -> bool:
        return file_extension(path) in self.extensions


def file_extension(path: str) -> str:
    """Return the lower-cased extension of a path, dot included."""
    _, ext = os.path.splitext(path)
    return ext.lower()


def _normalize(extensions: Iterable[str]) -> FrozenSet[str]:
    out = set()
    for ext in extensions:
        e = ext.strip().lower()
        if not e:
            continue
        out.add(e if e.startswith(".") else "." + e)
    return frozenset(out)

# -----------------------------------------------------------------------------
# CLASSIFIER
# -----------------------------------------------------------------------------

class Classifier:
    """
    Extension lookup shared by the section rewriter and the filter builder.

    Headers are checked first, so an extension listed in both sets is
    treated as a header.
    """

    def __init__(
            self,
            source_extensions: Optional[Iterable[str]] = None,
            header_extensions: Optional[Iterable[str]] = None,
    ):
        self.sources = CategoryRule(
            folder=SOURCE_FOLDER,
            item_tag=COMPILE_TAG,
            extensions=_normalize(
                DEFAULT_SOURCE_EXTENSIONS if source_extensions is None else source_extensions
            ),
        )
        self.headers = CategoryRule(
            folder=HEADER_FOLDER,
            item_tag=INCLUDE_TAG,
            extensions=_normalize(
                DEFAULT_HEADER_EXTENSIONS if header_extensions is None else header_extensions
            ),
        )

    def classify(self, path: str) -> Optional[CategoryRule]:
        """Return the category of a file, or None when it is not recognized."""
        if self.headers.matches(path):
            return self.headers
        if self.sources.matches(path):
            return self.sources
        return None

    def is_recognized(self, path: str) -> bool:
        return self.classify(path) is not None
