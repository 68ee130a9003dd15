from __future__ import annotations

"""
Name Exclusion Rules.

Directory and file names met during a scan are tested against regexes
from the configuration and, optionally, against the glob rules of the
scanned directory's .gitignore translated into regexes.
"""

import fnmatch
import logging
import os
import re
from dataclasses import dataclass
from typing import Iterable, List, Tuple

logger = logging.getLogger(__name__)

GITIGNORE_NAME = ".gitignore"


@dataclass(frozen=True)
class ExclusionRules:
    """Compiled exclusion regexes, each searched anywhere in an entry name."""
    patterns: Tuple[re.Pattern, ...] = ()

    @classmethod
    def compile(cls, sources: Iterable[str]) -> ExclusionRules:
        """Compile regex sources. Invalid ones are logged and dropped."""
        compiled: List[re.Pattern] = []
        for source in sources:
            try:
                compiled.append(re.compile(source))
            except re.error as e:
                logger.warning(f"Ignoring invalid pattern '{source}': {e}")
        return cls(tuple(compiled))

    def excludes(self, name: str) -> bool:
        return any(rx.search(name) for rx in self.patterns)


def gitignore_patterns(directory: str) -> List[str]:
    """
    Translate the glob rules of directory/.gitignore into regexes.

    Comments and negated rules ('!pattern') are skipped. Leading and
    trailing slashes are dropped, so 'build/' and '/build' both match an
    entry named 'build' at any depth.
    """
    path = os.path.join(directory, GITIGNORE_NAME)
    if not os.path.isfile(path):
        return []

    try:
        with open(path, "r", encoding="utf-8") as f:
            rules = [line.strip() for line in f]
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read '{path}': {e}")
        return []

    globs = [rule.strip("/") for rule in rules if rule and rule[0] not in "#!"]
    return [fnmatch.translate(glob) for glob in globs if glob]


def build_exclusions(directory: str, patterns: Iterable[str], respect_gitignore: bool) -> ExclusionRules:
    """Combine configured patterns with the .gitignore of directory, if requested."""
    sources = list(patterns)
    if respect_gitignore:
        ignored = gitignore_patterns(os.path.abspath(directory))
        if ignored:
            logger.debug(f"Loaded {len(ignored)} rules from {GITIGNORE_NAME} in {directory}")
        sources.extend(ignored)
    return ExclusionRules.compile(sources)
