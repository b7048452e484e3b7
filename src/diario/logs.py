import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_FILE_NAME = "diario.log"
LOG_FILE_MAX_BYTES = 512 * 1024
LOG_FILE_BACKUPS = 3

def _debug_from_env() -> bool:
    return os.getenv('DIARIO_DEBUG', '').lower() in ('1', 'true', 'yes')

def _level_from_env() -> int:
    """Console level from DIARIO_DEBUG / DIARIO_LOG_LEVEL; WARNING when neither is set."""
    if _debug_from_env():
        return logging.DEBUG
    env_level = os.getenv('DIARIO_LOG_LEVEL', '').upper()
    level = logging.getLevelName(env_level) if env_level else logging.WARNING
    return level if isinstance(level, int) else logging.WARNING

def default_log_dir() -> Path:
    return Path(os.getenv('DIARIO_LOG_DIR') or Path.home() / ".local" / "share" / "diario" / "logs").expanduser()

def _file_handler(log_dir: Path) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_dir / LOG_FILE_NAME, maxBytes=LOG_FILE_MAX_BYTES,
                                  backupCount=LOG_FILE_BACKUPS, encoding='utf-8')
    handler.setFormatter(logging.Formatter(
        '[%(asctime)s] %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s',
        '%Y-%m-%d %H:%M:%S',
    ))
    handler.setLevel(logging.DEBUG)
    return handler

def setup_logging(level: Optional[Union[int, str]] = None, log_dir: Optional[Path] = None):
    """
    (Re)configure the ``diario`` logger.

    The console handler writes to stderr so command output on stdout stays
    clean. Its level is ``level`` when given, otherwise it comes from the
    environment. The file log always records DEBUG and rotates at
    LOG_FILE_MAX_BYTES. Calling this again replaces the previous handlers.
    """
    if level is None:
        level = _level_from_env()
    elif isinstance(level, str):
        name, level = level, logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")
    verbose = level <= logging.DEBUG

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(
        '%(levelname)-8s [%(name)s] %(message)s' if verbose
        else '%(levelname)s: %(message)s'
    ))
    console_handler.setLevel(level)

    logger = logging.getLogger('diario')
    logger.setLevel(logging.DEBUG)  # Logger accepts all, handlers filter
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(console_handler)

    log_dir = log_dir or default_log_dir()
    try:
        logger.addHandler(_file_handler(log_dir))
    except OSError as e:
        # Read-only home: console logging only
        logger.warning(f"File logging disabled, cannot open {log_dir}: {e}")

    logger.propagate = False
    return logger

def console_level() -> int:
    """Level of the console handler currently installed on the ``diario`` logger."""
    for handler in logging.getLogger('diario').handlers:
        if not isinstance(handler, logging.FileHandler):
            return handler.level
    return logging.NOTSET

# Initialize logging when package is imported
setup_logging()

def get_logger(name: str = None):
    """Get a logger instance for a specific module."""
    if name:
        return logging.getLogger(f'diario.{name}')
    return logging.getLogger('diario')
