"""
Logging setup for PageBrief.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config.settings import LogLevel

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: LogLevel = LogLevel.INFO, log_file: Optional[str] = None) -> None:
    """Log to stdout and, when it can be created, to log_file."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(str(log_path)))
        except OSError:
            # File logging not available, use stdout only
            pass

    logging.basicConfig(
        level=level.value,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
