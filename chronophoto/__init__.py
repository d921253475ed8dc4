"""
chronophoto - Organize photos into a date-structured library.

Reads each photo's embedded EXIF capture time and moves or copies it into
daily, monthly, compact or flat folders below a library root, never
overwriting existing files and leaving already-organized files alone.
"""

__version__ = "0.3.0"


# Public API
from .cli import main
from .config import Action, Config, Mode, RunConfig
from .core import LibraryOrganizer
from .file_operations import FileOperations, TransferPair
from .planner import PathPlanner
from .timestamps import CaptureTimestamp, PhotoRecord, extract_capture_timestamp

__all__ = [ "main", "Action", "Config", "Mode", "RunConfig", "LibraryOrganizer", "FileOperations",
            "TransferPair", "PathPlanner", "CaptureTimestamp", "PhotoRecord", "extract_capture_timestamp" ]
