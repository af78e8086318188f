"""
Logging setup for Uyghurly.

``app.logger`` and every module logger (``logging.getLogger(__name__)``)
share the ``uyghurly_app`` hierarchy, so one console handler and, when
``LOG_DIR`` is configured, one rotating ``uyghurly.log`` cover them all.
"""

import logging
import logging.handlers
import os
from typing import Optional

LOGGER_NAME = 'uyghurly_app'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_FILE = 'uyghurly.log'


def setup_logging(app=None, log_level: str = 'INFO', log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``uyghurly_app`` logger.

    Args:
        app: Flask application; when given, werkzeug's request log is quietened
        log_level: DEBUG, INFO, WARNING or ERROR
        log_dir: Directory for the rotating log file; console only when omitted
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    # create_app may run many times in one process (tests)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, LOG_FILE),
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if app is not None:
        logging.getLogger('werkzeug').setLevel(logging.WARNING)

    logger.info(f"Logging initialized: level={log_level}, dir={log_dir or '<console only>'}")
    return logger
