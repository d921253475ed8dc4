"""Capture timestamp extraction from embedded EXIF data."""

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List

import exifread

from .constants import MIN_CAPTURE_YEAR, get_logger

# Primary image (IFD0) DateTime tag as named by exifread
DATETIME_TAG = "Image DateTime"

# EXIF stores "YYYY:MM:DD hh:mm:ss"; dash-separated dates are tolerated
EXIF_DATETIME_PATTERN = re.compile(
    r'\s*(\d{4})[-:](\d{2})[-:](\d{2})[T ](\d{2}):(\d{2}):(\d{2})'
)

logger = get_logger()


class ExtractError(Exception):
    """Base class for per-file metadata failures."""

    reason = "metadata could not be read"

    def __init__(self, path: Path, detail: str = ""):
        self.path = path
        self.detail = detail
        message = f"{self.reason}: {detail}" if detail else self.reason
        super().__init__(message)


class ExifIOError(ExtractError):
    reason = "file could not be read"


class MalformedContainerError(ExtractError):
    reason = "malformed metadata container"


class NoTimestampError(ExtractError):
    reason = "no valid DateTime field in EXIF data"


class UnparsableDateError(ExtractError):
    reason = "DateTime field is not a parsable date"


@dataclass(frozen=True)
class CaptureTimestamp:
    """Validated capture date and time of a photo.

    Construction fails with ValueError unless the fields form a real
    Gregorian date and time no earlier than 1970.
    """

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int

    def __post_init__(self):
        if self.year < MIN_CAPTURE_YEAR:
            raise ValueError(f"Capture year {self.year} predates {MIN_CAPTURE_YEAR}")
        # datetime() enforces calendar validity (month lengths, leap years, hour < 24)
        datetime(self.year, self.month, self.day, self.hour, self.minute, self.second)

    @property
    def stamp(self) -> str:
        """Compact form used for renamed files, e.g. 20250615_143000."""
        return (f"{self.year:04d}{self.month:02d}{self.day:02d}_"
                f"{self.hour:02d}{self.minute:02d}{self.second:02d}")


@dataclass(frozen=True)
class PhotoRecord:
    """A discovered file together with its capture timestamp."""

    source_path: Path
    capture_timestamp: CaptureTimestamp


def parse_exif_datetime(path: Path, value: str) -> CaptureTimestamp:
    """Turn the textual DateTime tag into a CaptureTimestamp.

    Text that does not look like a date raises UnparsableDateError. A
    well-formed date that is not a real calendar moment, or predates 1970,
    raises NoTimestampError: such photos are reported like photos without
    any timestamp.
    """
    match = EXIF_DATETIME_PATTERN.match(value)
    if not match:
        raise UnparsableDateError(path, repr(value))

    try:
        return CaptureTimestamp(*(int(part) for part in match.groups()))
    except ValueError as e:
        raise NoTimestampError(path, str(e)) from e


def extract_capture_timestamp(path: Path) -> CaptureTimestamp:
    """Read the primary DateTime tag of a file."""
    try:
        with open(path, 'rb') as f:
            try:
                tags = exifread.process_file(f, details=False)
            except OSError:
                raise
            except Exception as e:
                raise MalformedContainerError(path, str(e)) from e
    except OSError as e:
        raise ExifIOError(path, str(e)) from e

    tag = tags.get(DATETIME_TAG)
    if tag is None:
        raise NoTimestampError(path)

    value = str(tag).strip().strip('\x00')
    if not value:
        raise NoTimestampError(path, "DateTime field is empty")

    return parse_exif_datetime(path, value)


def paths_to_records(paths: List[Path]) -> List[PhotoRecord]:
    """Extract timestamps for all paths, dropping files that fail."""
    records = []
    for path in paths:
        try:
            timestamp = extract_capture_timestamp(path)
        except ExtractError as e:
            logger.warning(f"Skipping {path}: {e}")
            continue
        records.append(PhotoRecord(source_path=path, capture_timestamp=timestamp))

    logger.info(f"Found capture timestamps for {len(records)} of {len(paths)} files")
    return records
