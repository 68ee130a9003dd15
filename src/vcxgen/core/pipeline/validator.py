from __future__ import annotations

"""
Configuration Validation Service.

Acts as the gatekeeper for the export engine. Every configuration key
has a declared kind (text, flag or list) in a schema table; values are
coerced to that kind, defaults are injected for missing keys and every
correction is reported as a warning.
"""

import logging
from typing import Any, Callable, Dict, List, Tuple

from vcxgen.core.project.filters_builder import parse_namespace
from vcxgen.domain.config import get_default_config
from vcxgen.domain.errors import NamespaceParseError

logger = logging.getLogger(__name__)

Warnings = List[str]

# -----------------------------------------------------------------------------
# FIELD SCHEMA
# -----------------------------------------------------------------------------

TEXT = "text"
FLAG = "flag"
LIST = "list"

_SCHEMA: Dict[str, str] = {
    "template_path": TEXT,
    "output_dir": TEXT,
    "project_name": TEXT,
    "root_dir": TEXT,
    "uuid_namespace": TEXT,
    "filter_separator": TEXT,
    "source_extensions": LIST,
    "header_extensions": LIST,
    "exclude_patterns": LIST,
    "respect_gitignore": FLAG,
    "overwrite": FLAG,
}

# Empty template_path selects the bundled template
_MAY_BE_EMPTY = {"template_path"}
# Whitespace is a legitimate separator
_VERBATIM = {"filter_separator"}

_FLAG_WORDS: Dict[str, bool] = {
    "true": True, "yes": True, "y": True, "on": True, "1": True,
    "false": False, "no": False, "n": False, "off": False, "0": False,
}

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], Warnings]:
    """
    Validate and normalize the provided configuration dictionary.

    Unknown keys are dropped with a warning. The UUID namespace is checked
    but kept as given, so an invalid namespace still aborts filter
    generation later instead of being silently replaced.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on any value that would need correcting.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.

    Raises:
        TypeError: In strict mode, for values of the wrong kind.
        ValueError: In strict mode, for extensions without a leading dot.
        NamespaceParseError: In strict mode, for an invalid UUID namespace.
    """
    warnings: Warnings = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        logger.warning(msg)
        warnings.append(f"{msg} Using defaults.")
        return defaults, warnings

    cfg: Dict[str, Any] = dict(defaults)
    for key, value in config.items():
        kind = _SCHEMA.get(key)
        if kind is None:
            warnings.append(f"Unknown configuration key '{key}' ignored.")
            continue
        if value is None:
            continue
        cfg[key] = _COERCERS[kind](key, value, defaults[key], warnings, strict)

    for key in ("source_extensions", "header_extensions"):
        cfg[key] = _normalize_extensions(cfg[key], warnings, strict)

    try:
        parse_namespace(cfg["uuid_namespace"])
    except NamespaceParseError as e:
        if strict:
            raise
        warnings.append(str(e))

    return cfg, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: COERCION BY KIND
# -----------------------------------------------------------------------------

def _reject(key: str, expected: str, value: Any, warnings: Warnings, strict: bool) -> None:
    msg = f"Invalid field '{key}': expected {expected}, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")


def _coerce_text(key: str, value: Any, fallback: str, warnings: Warnings, strict: bool) -> str:
    if not isinstance(value, str):
        _reject(key, "str", value, warnings, strict)
        return fallback

    text = value if key in _VERBATIM else value.strip()
    if text or key in _MAY_BE_EMPTY:
        return text
    return fallback


def _coerce_flag(key: str, value: Any, fallback: bool, warnings: Warnings, strict: bool) -> bool:
    if isinstance(value, bool):
        return value

    if not strict:
        word = str(value).strip().lower() if isinstance(value, (str, int)) else None
        if word in _FLAG_WORDS:
            warnings.append(f"Field '{key}' converted from {value!r} to {_FLAG_WORDS[word]}.")
            return _FLAG_WORDS[word]

    _reject(key, "bool", value, warnings, strict)
    return fallback


def _coerce_list(key: str, value: Any, fallback: List[str], warnings: Warnings, strict: bool) -> List[str]:
    # Comma-separated strings come from the CLI and hand-written JSON
    if isinstance(value, str) and not strict:
        warnings.append(f"Field '{key}' converted from CSV string to list.")
        return [part.strip() for part in value.split(",") if part.strip()]

    if not isinstance(value, list):
        _reject(key, "list[str]", value, warnings, strict)
        return list(fallback)

    items: List[str] = []
    for index, item in enumerate(value):
        if not isinstance(item, str):
            msg = f"Invalid item in '{key}[{index}]': expected str."
            if strict:
                raise TypeError(msg)
            warnings.append(f"{msg} Item discarded.")
        elif item.strip():
            items.append(item.strip())
    return items


_COERCERS: Dict[str, Callable[..., Any]] = {
    TEXT: _coerce_text,
    FLAG: _coerce_flag,
    LIST: _coerce_list,
}

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_extensions(extensions: List[str], warnings: Warnings, strict: bool) -> List[str]:
    """Lower-case extensions, give each a leading dot and drop repeats."""
    seen: List[str] = []
    for raw in extensions:
        ext = raw.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            if strict:
                raise ValueError(f"Invalid extension '{raw}': must start with '.'.")
            warnings.append(f"Extension '{raw}' corrected to '.{ext}'.")
            ext = "." + ext
        if ext not in seen:
            seen.append(ext)
    return seen
