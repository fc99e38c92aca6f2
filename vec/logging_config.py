"""
Logging setup for command-line tools of the 'vec' namespace.
The library itself only creates module loggers and never configures them.
"""
import logging
import sys


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Sends records of the 'vec' namespace at `level` and above to stdout.
    Calling it again replaces the previous handler.
    """
    logger = logging.getLogger("vec")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter('%(name)s: %(levelname)s: %(message)s'))
    logger.addHandler(handler)
    return logger
