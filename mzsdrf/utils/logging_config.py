# mzsdrf/utils/logging_config.py
import logging
import logging.handlers
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _attach(logger, handler, log_level, formatter):
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def setup_logging(log_level=logging.INFO, log_file=None):
    """
    Configure the ``mzsdrf`` logger.

    Console messages go to stderr, never stdout: stdout carries the annotated
    mzML stream.

    Args:
        log_level (int): The minimum logging level to display.
        log_file (str): Path to an additional rotating log file, or None.

    Returns:
        logging.Logger: The configured package logger.
    """
    logger = logging.getLogger("mzsdrf")
    logger.setLevel(log_level)

    # Reconfiguring replaces earlier handlers instead of stacking them
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)
    _attach(logger, logging.StreamHandler(sys.stderr), log_level, formatter)
    if log_file:
        _attach(
            logger,
            logging.handlers.RotatingFileHandler(
                log_file, maxBytes=10 * 1024 * 1024, backupCount=5
            ),
            log_level,
            formatter,
        )

    logger.debug(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger
