"""Diagnostic logging.

The interactive list redraws the whole terminal, so console output is off;
records go to a rotating file next to the task data instead.
"""
from pathlib import Path
from typing import Optional
from loguru import logger

LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}

def configure_logging(log_path: Optional[Path], level: str = "INFO"):
    """Replace loguru's default stderr sink with a file sink.

    With ``log_path`` None all sinks are removed and logging is silent.
    """
    logger.remove()
    if log_path is None:
        return logger
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        # unwritable data dir: run without a log file
        return logger
    if level not in LEVELS:
        level = "INFO"
    try:
        logger.add(
            log_path,
            level=level,
            backtrace=True,
            diagnose=False,
            rotation="5 MB",
            retention="14 days",
        )
    except OSError:
        # log path is a directory or not writable
        return logger
    return logger
