"""
Logging configuration for the dues application.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Dict, Any
import sys


DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
SIMPLE_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def _rotating_handler(path: Path, level: int, config: Dict[str, Any]) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=config.get('max_log_size', 5 * 1024 * 1024),  # 5MB
        backupCount=config.get('backup_count', 3)
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    return handler


def setup_logger(
    name: str = 'dpcdues',
    level: str = 'INFO',
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None
) -> logging.Logger:
    """
    Set up logging for the application.

    File logging is off unless ``config['log_to_file']`` is true; the
    Streamlit app and tests only need the console.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Log file name (if None, uses name.log)
        log_dir: Log directory (if None, uses 'logs')
        config: Additional configuration options

    Returns:
        Configured logger instance
    """
    config = config or {}

    logger = logging.getLogger(name)
    logger.handlers.clear()

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT, datefmt='%H:%M:%S'))
    logger.addHandler(console_handler)

    if config.get('log_to_file', False):
        log_path = Path(log_dir or 'logs')
        log_path.mkdir(parents=True, exist_ok=True)

        logger.addHandler(_rotating_handler(log_path / (log_file or f'{name}.log'),
                                            numeric_level, config))

        # Errors also go to their own file
        if config.get('separate_error_log', True):
            logger.addHandler(_rotating_handler(log_path / f'{name}_errors.log',
                                                logging.ERROR, config))

    logger.info(f"Logger '{name}' initialized with level {level}")

    return logger


def configure_library_loggers(level: str = 'WARNING'):
    """
    Quiet third-party loggers.

    Args:
        level: Logging level for libraries
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    for lib_name in ('streamlit', 'pandas', 'urllib3', 'watchdog'):
        logging.getLogger(lib_name).setLevel(numeric_level)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance under the application namespace.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if not name.startswith('dpcdues'):
        name = f'dpcdues.{name}'
    return logging.getLogger(name)
