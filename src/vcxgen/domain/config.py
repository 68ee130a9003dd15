from __future__ import annotations

"""
Configuration Domain Management.

Defines the default export configuration and loads optional JSON
configuration files. Configuration is a plain dictionary that flows
through the validator before reaching the export engine.
"""

import json
import logging
import os
from typing import Any, Dict

from vcxgen.domain.constants import (
    DEFAULT_HEADER_EXTENSIONS,
    DEFAULT_PROJECT_NAME,
    DEFAULT_SOURCE_EXTENSIONS,
    DEFAULT_UUID_NAMESPACE,
)
from vcxgen.domain.errors import ConfigError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "vcxgen.json"


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default export configuration.

    An empty template_path selects the template bundled with the package.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    base = os.getcwd()
    return {
        # IO Paths
        "template_path": "",
        "output_dir": base,
        "project_name": DEFAULT_PROJECT_NAME,
        "root_dir": base,

        # Filter hierarchy
        "uuid_namespace": DEFAULT_UUID_NAMESPACE,
        "filter_separator": os.sep,

        # Classification
        "source_extensions": list(DEFAULT_SOURCE_EXTENSIONS),
        "header_extensions": list(DEFAULT_HEADER_EXTENSIONS),

        # Discovery
        "exclude_patterns": [
            r"^(\.git|\.vs|\.vscode|\.idea|build|out|x64|Debug|Release)$",
        ],
        "respect_gitignore": True,

        # Safety
        "overwrite": False,
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_config_file(path: str) -> Dict[str, Any]:
    """
    Load configuration overrides from a JSON file.

    Args:
        path: Path to a JSON document holding an object.

    Returns:
        Dict[str, Any]: Raw, unvalidated overrides.

    Raises:
        ConfigError: If the file cannot be read, parsed, or is not an object.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in configuration file '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file '{path}' must contain a JSON object.")

    logger.debug(f"Loaded {len(data)} configuration keys from {path}")
    return data


def find_local_config(directory: str) -> str:
    """Return the path of a vcxgen.json in directory, or an empty string."""
    candidate = os.path.join(directory, CONFIG_FILE_NAME)
    return candidate if os.path.isfile(candidate) else ""
