import logging
import sys
from hot_dead_pixel.config import settings # Use absolute import

# Map string level names to logging constants
LOG_LEVEL_MAP = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}

# Get the desired level from settings, default to INFO if invalid or not found
log_level_str = getattr(settings, 'LOGGING_LEVEL', 'INFO').upper()
log_level = LOG_LEVEL_MAP.get(log_level_str, logging.INFO)

log_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

# Console Handler
console_handler = logging.StreamHandler(sys.stdout) # Use stdout for console output
console_handler.setFormatter(log_formatter)

# Names handed out by get_logger, so set_log_level can reach all of them
_known_loggers = set()


def get_logger(name):
    """
    Gets a logger instance configured with the application's settings.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Prevent adding handlers multiple times if get_logger is called repeatedly for the same name
    if not logger.handlers:
        logger.addHandler(console_handler)

    # Prevent messages from propagating to the root logger if handlers are added
    logger.propagate = False
    _known_loggers.add(name)

    return logger


def set_log_level(level):
    """
    Changes the level of every application logger at runtime.

    Args:
        level (str): One of the LOG_LEVEL_MAP keys (case-insensitive).

    Returns:
        int: The numeric level that was applied.
    """
    global log_level
    new_level = LOG_LEVEL_MAP.get(str(level).upper())
    if new_level is None:
        raise ValueError(f"Unknown log level '{level}'. Expected one of {sorted(LOG_LEVEL_MAP)}.")
    log_level = new_level
    for name in _known_loggers:
        logging.getLogger(name).setLevel(new_level)
    return new_level
