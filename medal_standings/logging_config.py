"""Logging setup for medal-standings entry points.

``configure_logging()`` is called once by the CLI. Library code only creates
module loggers and never installs handlers itself.
"""

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_DIR = "logs"
LOG_FILE = "standings.log"

# Connection-pool chatter drowns out fetch diagnostics at DEBUG
QUIET_LOGGERS = ("urllib3", "charset_normalizer")


def configure_logging(level: int = logging.INFO, log_dir: Optional[str] = DEFAULT_LOG_DIR) -> bool:
    """Install console (and, when log_dir is set, file) handlers on the root logger.

    Args:
        level: Root log level
        log_dir: Directory for standings.log (None = console only)

    Returns:
        True if handlers were installed, False if logging was already configured
    """
    root = logging.getLogger()
    if root.handlers:
        return False

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [logging.StreamHandler()]

    if log_dir is not None:
        try:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(log_dir, LOG_FILE), mode="a"))
        except OSError as e:
            logging.getLogger(__name__).warning(f"File logging disabled, cannot use {log_dir}: {e}")

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return True
