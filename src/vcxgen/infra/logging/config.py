from __future__ import annotations

"""
Logging Configuration Model.

The CLI builds one LoggingConfig per run from its --debug and
--log-file options and hands it to configure_logging().
"""

import logging
from dataclasses import dataclass
from typing import Optional

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for one logging bootstrap.

    Attributes:
        level: Level name applied to the root logger and every handler.
        console: Emit records on stderr.
        log_file: Also append records to this file, rotated by size.
        max_bytes: Size that triggers rotation of the log file.
        backup_count: Rotated files kept next to the log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = CONSOLE_FORMAT
    file_fmt: str = FILE_FORMAT
    datefmt: str = DATE_FORMAT

    @classmethod
    def for_cli(cls, debug: bool, log_file: Optional[str] = None) -> LoggingConfig:
        return cls(level="DEBUG" if debug else "INFO", log_file=log_file or None)

    def level_number(self) -> int:
        """Numeric level of this config. Unknown names fall back to INFO."""
        value = logging.getLevelName(str(self.level or "").strip().upper())
        return value if isinstance(value, int) else logging.INFO
