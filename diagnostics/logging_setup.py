from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

LOGGER_NAME = "canvas"
# module loggers of the engine and its Qt host report through the same file
PACKAGE_LOGGERS = ("canvas_core", "canvas_qt")
LOG_FORMAT = "ts=%(asctime)s level=%(levelname)s msg=%(message)s"
LOG_FILE_NAME = "canvas.log"
DEFAULT_BASE_DIR = Path("data/roaming")

_HANDLER: Optional[logging.FileHandler] = None


def _loggers() -> List[logging.Logger]:
    return [logging.getLogger(name) for name in (LOGGER_NAME, *PACKAGE_LOGGERS)]


def configure_logging(base_dir: Optional[Path] = None, level: int = logging.INFO) -> Dict[str, str]:
    """Send canvas logs to <base_dir>/logs/canvas.log; reconfiguring to another dir moves the file."""
    global _HANDLER
    log_path = (base_dir or DEFAULT_BASE_DIR) / "logs" / LOG_FILE_NAME
    log_path.parent.mkdir(parents=True, exist_ok=True)

    if _HANDLER is not None and _HANDLER.baseFilename != os.path.abspath(log_path):
        shutdown_logging()
    if _HANDLER is None:
        _HANDLER = logging.FileHandler(log_path, encoding="utf-8")
        _HANDLER.setFormatter(logging.Formatter(LOG_FORMAT))
        for logger in _loggers():
            logger.addHandler(_HANDLER)
            logger.propagate = False
    for logger in _loggers():
        logger.setLevel(level)

    return {
        "log_path": str(log_path),
        "format": "kv",
        "handlers": "file",
        "logger_name": LOGGER_NAME,
    }


def shutdown_logging() -> None:
    """Detach and close the file handler, handing records back to the root logger."""
    global _HANDLER
    if _HANDLER is None:
        return
    for logger in _loggers():
        logger.removeHandler(_HANDLER)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
    _HANDLER.close()
    _HANDLER = None


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)
