from __future__ import annotations

"""
Logging Handler Factories.

Every handler created here carries a tag so the application can remove
its own handlers again without touching ones installed by the host
(e.g. pytest's capture handlers).
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from vcxgen.infra.logging.config import LoggingConfig

_HANDLER_TAG_ATTR: str = "_vcxgen_handler"


def _tag_handler(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_console_handler(cfg: LoggingConfig) -> logging.Handler:
    """Stream handler on stderr, so stdout stays free for --json output."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(cfg.level_number())
    handler.setFormatter(logging.Formatter(cfg.console_fmt))
    return _tag_handler(handler)


def _create_rotating_file_handler(cfg: LoggingConfig) -> Optional[RotatingFileHandler]:
    """
    Open the size-rotated log file described by cfg.

    The parent directory is created when missing.

    Returns:
        Optional[RotatingFileHandler]: The handler, or None when the file
                                       cannot be opened. A warning goes
                                       to stderr in that case.
    """
    log_file = str(cfg.log_file)
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(parent, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    handler.setLevel(cfg.level_number())
    handler.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
    return _tag_handler(handler)
