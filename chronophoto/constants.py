"""
Program-wide constants and shared console/logger accessors.
"""

import logging
from typing import Optional

from rich.console import Console

PROGRAM = "chronophoto"

# Run defaults used when neither the command line nor config.yml set a value
DEFAULT_MODE = "daily"
DEFAULT_LIMIT = 25
MAX_LIMIT = 65535
DEFAULT_ACTION = "move"

# Marker probed in the library root to confirm it accepts new files
WRITABILITY_PROBE = ".writability_test"

# Earliest capture year accepted from EXIF data
MIN_CAPTURE_YEAR = 1970

_console: Optional[Console] = None


def get_console() -> Console:
    """Return the shared rich console used for output, logging and progress."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def get_logger() -> logging.Logger:
    """Return the program logger."""
    return logging.getLogger(PROGRAM)
