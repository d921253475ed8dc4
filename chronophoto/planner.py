"""
Destination path planning for the photo library.
"""

from collections import Counter
from pathlib import Path
from typing import Dict, List, Tuple

from .config import Mode, RunConfig
from .exceptions import PlanningError
from .file_operations import TransferPair
from .timestamps import CaptureTimestamp, PhotoRecord


def month_key(timestamp: CaptureTimestamp) -> Tuple[int, int]:
    return timestamp.year, timestamp.month


def files_per_month(records: List[PhotoRecord]) -> Dict[Tuple[int, int], int]:
    """Count records per (year, month)."""
    return Counter(month_key(record.capture_timestamp) for record in records)


def daily_folder(timestamp: CaptureTimestamp) -> Path:
    return Path(f"{timestamp.year:04d}") / f"{timestamp.month:02d}" / f"{timestamp.day:02d}"


def monthly_folder(timestamp: CaptureTimestamp) -> Path:
    return Path(f"{timestamp.year:04d}") / f"{timestamp.month:02d}"


def build_filename(record: PhotoRecord, rename: bool) -> str:
    """Destination file name: the original name, or YYYYMMDD_hhmmss plus extension."""
    name = record.source_path.name
    if not name:
        raise PlanningError(f"Source path has no file name: {record.source_path}")

    if rename:
        return record.capture_timestamp.stamp + record.source_path.suffix
    return name


class PathPlanner:
    """Computes one library destination per photo record."""

    def __init__(self, config: RunConfig):
        self.config = config

    def plan(self, records: List[PhotoRecord]) -> List[TransferPair]:
        """Plan destinations for all records, preserving input order."""
        month_counts = files_per_month(records) if self.config.mode is Mode.COMPACT else {}

        pairs = []
        for record in records:
            folder = self._folder_for(record.capture_timestamp, month_counts)
            destination = self.config.library_root / folder / build_filename(record, self.config.rename)
            pairs.append(TransferPair(record.source_path, destination))
        return pairs

    def _folder_for(self, timestamp: CaptureTimestamp, month_counts: Dict[Tuple[int, int], int]) -> Path:
        mode = self.config.mode
        if mode is Mode.DAILY:
            return daily_folder(timestamp)
        elif mode is Mode.MONTHLY:
            return monthly_folder(timestamp)
        elif mode is Mode.FLAT:
            return Path()
        elif mode is Mode.COMPACT:
            # Escalate to day folders only once a month holds more than the limit
            if month_counts[month_key(timestamp)] > self.config.monthly_limit:
                return daily_folder(timestamp)
            return monthly_folder(timestamp)
        raise AssertionError(f"Unhandled mode: {mode}")
