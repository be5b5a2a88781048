import logging
import sys


logger = logging.getLogger("repoclone")


def configure_logging(debug: bool):
    """
    Configures the repoclone logger based on the debug flag.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(log_level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
