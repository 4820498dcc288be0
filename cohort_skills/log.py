from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def log_level() -> str:
    return os.getenv("COHORT_SKILLS_LOG_LEVEL", "INFO").upper()


def get_logger(name: str = "cohort_skills") -> logging.Logger:
    """Logger with a single console handler; repeated calls reuse it."""
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(log_level())
        logger.propagate = False

    return logger
