"""
Core library organization pipeline.
"""

import os
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from .config import RunConfig
from .constants import get_console, get_logger
from .file_operations import FileOperations, TransferPair
from .planner import PathPlanner
from .preflight import need_progress_bar, setup_logging, validate_directories
from .progress import transfer_progress
from .stats import StatsManager
from .timestamps import PhotoRecord, paths_to_records


class LibraryOrganizer:
    """Runs discovery, timestamp extraction, planning and transfer for one config."""

    def __init__(self, config: RunConfig, console: Optional[Console] = None):
        self.config = config
        self.console = console or get_console()
        self.logger = get_logger()
        self.planner = PathPlanner(config)
        self.file_ops = FileOperations(action=config.action, dry_run=config.dry_run)
        self.stats_manager = StatsManager()

    def find_source_files(self) -> List[Path]:
        """Recursively list regular files below the source directory.

        Entries that cannot be read are logged and skipped.
        """
        def report(error: OSError) -> None:
            self.logger.error(f"Failed to access path during file discovery: {error}")

        files = []
        for dirpath, dirnames, filenames in os.walk(self.config.source_dir, onerror=report):
            dirnames.sort()
            for filename in sorted(filenames):
                path = Path(dirpath) / filename
                if path.is_file():
                    files.append(path)
        return files

    def extract_records(self, paths: List[Path]) -> List[PhotoRecord]:
        return paths_to_records(paths)

    def plan(self, records: List[PhotoRecord]) -> List[TransferPair]:
        return self.planner.plan(records)

    def transfer(self, pairs: List[TransferPair]) -> StatsManager:
        enabled = need_progress_bar(self.config)
        with transfer_progress(self.console, len(pairs), enabled) as progress_ctx:
            return self.file_ops.transfer_all(pairs, progress_ctx)

    def run(self) -> str:
        """Organize the source directory into the library and return the summary line.

        Raises:
            SetupError: directories unusable or log file not creatable
            PlanningError: a path lacks a file name component
        """
        validate_directories(self.config)
        setup_logging(self.config, self.console)

        self.logger.info(f"Starting import session: {self.config.source_dir} -> {self.config.library_root}")
        self.logger.info(f"Mode: {self.config.mode.value}, action: "
                         f"{'DRY RUN' if self.config.dry_run else self.config.action.value.upper()}")

        paths = self.find_source_files()
        self.logger.info(f"Discovered {len(paths)} files in {self.config.source_dir}")

        records = self.extract_records(paths)
        pairs = self.plan(records)

        self.stats_manager = self.transfer(pairs)
        self.stats_manager.record_discovery(discovered=len(paths), planned=len(pairs))

        summary = self.stats_manager.format_summary(self.config.dry_run)
        self.logger.info(summary)
        return summary
