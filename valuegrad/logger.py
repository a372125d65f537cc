import logging
import sys

ROOT_LOGGER = "valuegrad"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logger(name=ROOT_LOGGER, level=logging.INFO, fmt=DEFAULT_FORMAT):
    """
    Attach a stdout handler to `name` once and set its level.
    Calling it again only updates the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)

    return logger


def get_logger(module_name):
    # "valuegrad.core.engine" is already a child of the package logger;
    # anything else (scripts, tests) is nested under it
    if module_name == ROOT_LOGGER or module_name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(module_name)
    return logging.getLogger(f"{ROOT_LOGGER}.{module_name}")
