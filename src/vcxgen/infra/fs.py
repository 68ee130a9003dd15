from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation, bundled resource lookup and
whole-file reads and writes. Every file handle is opened in a scoped
block so it is released on success and on failure alike.
"""

import os
from typing import BinaryIO, Callable, List, Optional, Tuple

from vcxgen.domain.constants import FILTERS_SUFFIX, PROJECT_EXTENSION
from vcxgen.domain.errors import SinkWriteError, TemplateNotFoundError

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

RESOURCES_DIR = os.path.abspath(
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "resources")
)
DEFAULT_TEMPLATE_NAME = "template.vcxproj"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def to_native_path(path: str) -> str:
    """Replace forward slashes with the platform separator."""
    if os.sep == "/":
        return path
    return path.replace("/", os.sep)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def get_default_template_path() -> str:
    """Absolute path of the project template shipped with the package."""
    return os.path.join(RESOURCES_DIR, DEFAULT_TEMPLATE_NAME)


def get_output_paths(output_dir: str, project_name: str) -> Tuple[str, str]:
    """
    Calculate the destinations of the project file and its filters file.

    Returns:
        Tuple[str, str]: (project path, filters path).
    """
    project_path = os.path.join(output_dir, project_name + PROJECT_EXTENSION)
    return project_path, project_path + FILTERS_SUFFIX

# -----------------------------------------------------------------------------
# FILESYSTEM I/O API
# -----------------------------------------------------------------------------

def read_template(path: str) -> bytes:
    """
    Read a template document in full.

    Raises:
        TemplateNotFoundError: If the file is missing or unreadable.
    """
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise TemplateNotFoundError(f"Cannot read project template '{path}': {e}") from e


def write_file(path: str, writer: Callable[[BinaryIO], None]) -> None:
    """
    Create or truncate a file and let the writer stream into it.

    Raises:
        SinkWriteError: If the file cannot be opened, written or closed.
    """
    try:
        with open(path, "wb") as f:
            writer(f)
    except OSError as e:
        raise SinkWriteError(f"Failed to write '{path}': {e}") from e


def check_existing_output_files(paths: List[str]) -> List[str]:
    """
    Identify which of the target paths already exist.

    Args:
        paths: Paths to check for existence.

    Returns:
        List[str]: Paths that already exist.
    """
    return [p for p in paths if os.path.exists(p)]


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)
