import logging
import sys

def get_logger(level: str | None = None):
    logger = logging.getLogger("x509verify")
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        fmt = logging.Formatter("[%(asctime)s] %(levelname)s %(message)s")
        h.setFormatter(fmt)
        logger.addHandler(h)
        logger.setLevel(logging.INFO)
    if level:
        logger.setLevel(level.upper())
    return logger
