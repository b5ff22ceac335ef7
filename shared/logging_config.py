"""
Logging setup for processes embedding the volume binder.

Level and log file default to VOLUME_BINDER_LOG_LEVEL / VOLUME_BINDER_LOG_FILE.
Calling setup_logging again with the same log file does not attach a second
file handler.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from binder import config

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def default_format(component_name: str) -> str:
    return f'[%(asctime)s] [{component_name.upper()}] %(levelname)s - %(message)s'


def _attach_file_handler(root: logging.Logger, log_file: str, formatter: logging.Formatter) -> None:
    log_path = Path(log_file).resolve()
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename).resolve() == log_path:
            handler.setFormatter(formatter)
            return

    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_path)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)


def setup_logging(
    component_name: str = "binder",
    level: Optional[int] = None,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Route binder logs to stdout (and optionally a file) and return the component logger.

    Args:
        component_name: Shown in every line, e.g. 'binder' or 'controller'
        level: Root logging level (defaults to VOLUME_BINDER_LOG_LEVEL)
        log_file: Extra file destination (defaults to VOLUME_BINDER_LOG_FILE)
        format_string: Overrides the default "[time] [COMPONENT] LEVEL - message" layout
    """
    level = config.LOG_LEVEL if level is None else level
    log_file = config.LOG_FILE if log_file is None else log_file
    formatter = logging.Formatter(format_string or default_format(component_name), datefmt=DATE_FORMAT)

    root = logging.getLogger()
    # Hosts (and pytest) may already own root handlers; only add stdout when none exist
    if not root.handlers:
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)
    root.setLevel(level)

    if log_file:
        _attach_file_handler(root, log_file, formatter)

    logger = logging.getLogger(component_name)
    logger.info(f"{component_name.upper()} logging initialized (level={logging.getLevelName(level)})")
    return logger
