"""
Checks and setup performed once before any file is touched.
"""

import logging
import os
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .config import RunConfig
from .constants import WRITABILITY_PROBE, get_logger
from .exceptions import SetupError

LOG_FORMAT = '%(asctime)s [%(name)s] %(levelname)s: %(message)s'


def is_dir_writable(path: Path) -> bool:
    """Probe a directory by creating and removing a marker file."""
    probe = path / WRITABILITY_PROBE
    try:
        fd = os.open(probe, os.O_WRONLY | os.O_CREAT | os.O_EXCL)
    except OSError:
        return False

    os.close(fd)
    try:
        probe.unlink()
    except OSError as e:
        get_logger().warning(f"Could not remove writability probe {probe}: {e}")
    return True


def validate_directories(config: RunConfig) -> None:
    """Abort the run unless the source exists and the library can take files."""
    source, library = config.source_dir, config.library_root

    if not source.exists():
        raise SetupError(f"Source directory does not exist: {source}")
    if not source.is_dir():
        raise SetupError(f"Source is not a directory: {source}")

    if library.exists():
        if not library.is_dir():
            raise SetupError(f"Library path exists but is not a directory: {library}")
        if not is_dir_writable(library):
            raise SetupError(f"Library directory exists but is not writable: {library}")


def setup_logging(config: RunConfig, console: Console) -> logging.Logger:
    """Install console and optional log-file handlers on the program logger.

    Handlers from a previous run are closed and replaced. The run level is
    DEBUG for verbose or dry runs and INFO otherwise; the console only shows
    warnings unless verbose output was requested without a log file.
    """
    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level = logging.DEBUG if (config.verbose or config.dry_run) else logging.INFO
    logger.setLevel(level)

    console_handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    if config.verbose and config.log_file is None:
        console_handler.setLevel(logging.DEBUG)
    else:
        console_handler.setLevel(logging.WARNING)
    logger.addHandler(console_handler)

    if config.log_file is not None:
        try:
            file_handler = logging.FileHandler(config.log_file, mode='w', encoding='utf-8')
        except OSError as e:
            raise SetupError(f"Cannot create log file {config.log_file}: {e}") from e
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    # Decoder chatter about non-image files is not useful to users
    logging.getLogger("exifread").setLevel(logging.ERROR)

    return logger


def need_progress_bar(config: RunConfig) -> bool:
    """Progress bar only when log records go to a file and files actually move."""
    return not config.dry_run and config.log_file is not None
