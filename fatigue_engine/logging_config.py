"""
Logging Configuration Module
Console logging plus an optional size-rotated log file
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from fatigue_engine.config import LOG_LEVEL, LOG_DIR


def setup_logging(level=None, log_dir=None):
    """Initialize console logging, plus a rotating file when log_dir is set."""
    level = (level or LOG_LEVEL).upper()
    log_dir = log_dir or LOG_DIR

    handlers = [logging.StreamHandler()]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                os.path.join(log_dir, "fatigue_engine.log"),
                maxBytes=10485760,  # 10MB
                backupCount=5,
            )
        )

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )

    logger = logging.getLogger(__name__)
    logger.info("Logging initialized (level=%s)", level)
    return logger
