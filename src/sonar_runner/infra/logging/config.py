from __future__ import annotations

"""
Logging Configuration Models.

Defines the settings used to initialize the logging subsystem of the
runner and the mapping from textual levels to logging constants.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "TRACE": logging.DEBUG,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable settings of the logging subsystem.

    Attributes:
        level: Minimum severity level to capture.
        console: Flag to enable terminal output.
        log_file: Optional path of a persistent, rotated log file.
        max_bytes: Maximum size per log segment before rotation.
        backup_count: Number of rotated segments to keep.
        console_fmt: Format of terminal entries.
        file_fmt: Format of file entries.
        datefmt: Timestamp format.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s: %(message)s"
    file_fmt: str = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
    datefmt: str = "%H:%M:%S"
