from __future__ import annotations

"""
Input File Discovery Service.

Assembles the ordered list of files a project is generated from. Files
can be named directly, listed in text files, or found by walking source
directories with exclusion rules and .gitignore support.
"""

import logging
import os
import sys
from typing import Iterable, Iterator, List, Optional, Sequence

from vcxgen.core.project.classifier import Classifier
from vcxgen.core.services.patterns import ExclusionRules, build_exclusions

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def collect_input_files(
        explicit: Sequence[str],
        list_files: Sequence[str],
        scan_dirs: Sequence[str],
        *,
        classifier: Classifier,
        exclude_patterns: Optional[List[str]] = None,
        respect_gitignore: bool = True,
) -> List[str]:
    """
    Merge every input source into one ordered file list.

    Order is explicit paths first, then list files, then directory scans.
    Paths are kept as given; duplicates are kept as well, since the
    generated documents list every input occurrence.

    Args:
        explicit: Paths given directly.
        list_files: Text files holding one path per line.
        scan_dirs: Directories to walk for recognized source files.
        classifier: Decides which scanned files are relevant.
        exclude_patterns: Regexes applied to directory and file names.
        respect_gitignore: Merge each scan root's .gitignore into exclusions.

    Returns:
        List[str]: The combined file list.

    Raises:
        OSError: If a list file cannot be read.
    """
    files: List[str] = list(explicit)

    for list_file in list_files:
        listed = read_file_list(list_file)
        logger.debug(f"Read {len(listed)} paths from {list_file}")
        files.extend(listed)

    for directory in scan_dirs:
        rules = build_exclusions(directory, exclude_patterns or [], respect_gitignore)
        found = list(yield_source_files(directory, classifier, rules))
        logger.info(f"Found {len(found)} source files under {directory}")
        files.extend(found)

    return files


def read_file_list(path: str) -> List[str]:
    """
    Read a list file. Blank lines and lines starting with '#' are ignored.

    Args:
        path: Text file with one path per line, or '-' for standard input.
    """
    if path == "-":
        return _parse_list_lines(sys.stdin)

    with open(path, "r", encoding="utf-8") as f:
        return _parse_list_lines(f)


def yield_source_files(
        input_path: str,
        classifier: Classifier,
        exclusions: ExclusionRules,
) -> Iterator[str]:
    """
    Walk a directory and yield recognized source and header files.

    Directories matching an exclusion are pruned before descent. Walk
    order is sorted so that results are reproducible.

    Yields:
        str: Path of each file, rooted at input_path as given.
    """
    for root, dirs, files in os.walk(input_path):
        dirs[:] = sorted(d for d in dirs if not exclusions.excludes(d))

        for file_name in sorted(files):
            if exclusions.excludes(file_name):
                continue
            if not classifier.is_recognized(file_name):
                continue
            yield os.path.join(root, file_name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_list_lines(lines: Iterable[str]) -> List[str]:
    out: List[str] = []
    for line in lines:
        entry = line.strip()
        if entry and not entry.startswith("#"):
            out.append(entry)
    return out
