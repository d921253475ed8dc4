"""
File transfer into the library with collision-safe naming.
"""

import errno
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Union

from .config import Action
from .constants import get_logger
from .exceptions import PlanningError
from .progress import ProgressContext
from .stats import StatsManager


@dataclass(frozen=True)
class TransferPair:
    """A source file and its planned library destination."""

    source_path: Path
    destination_path: Path


@dataclass(frozen=True)
class Transferred:
    final_path: Path


@dataclass(frozen=True)
class AlreadyInPlace:
    final_path: Path


@dataclass(frozen=True)
class Failed:
    error: Exception


TransferOutcome = Union[Transferred, AlreadyInPlace, Failed]


def is_same_file(first: Path, second: Path) -> bool:
    """Compare canonical paths; anything that cannot be resolved is not the same."""
    try:
        return first.resolve(strict=True) == second.resolve(strict=True)
    except (OSError, RuntimeError):
        return False


def next_available_name(file_path: Path,
                        exists: Callable[[Path], bool] = os.path.lexists) -> Path:
    """First free sibling of file_path named stem(n).ext, n counting from 1."""
    stem = file_path.stem
    if not stem:
        raise PlanningError(f"Destination path has no file name: {file_path}")

    suffix = file_path.suffix
    counter = 1
    candidate = file_path.with_name(f"{stem}({counter}){suffix}")
    while exists(candidate):
        counter += 1
        candidate = file_path.with_name(f"{stem}({counter}){suffix}")
    return candidate


class FileOperations:
    """Moves or copies planned pairs into the library, one at a time."""

    def __init__(self, action: Action, dry_run: bool):
        self.action = action
        self.dry_run = dry_run
        self.logger = get_logger()

    def transfer_all(self, pairs: List[TransferPair],
                     progress_ctx: Optional[ProgressContext] = None) -> StatsManager:
        """Transfer every pair in order, counting outcomes. Never raises for a single pair."""
        self.logger.info(f"Will organize {len(pairs)} photos")
        stats = StatsManager()

        for pair in pairs:
            if self.dry_run:
                outcome = self.preview_one(pair)
            else:
                outcome = self.transfer_one(pair)
            self._record(stats, pair, outcome)

            if progress_ctx:
                progress_ctx.advance(pair.source_path.name)

        return stats

    def preview_one(self, pair: TransferPair) -> TransferOutcome:
        """Dry-run classification; touches nothing."""
        if is_same_file(pair.source_path, pair.destination_path):
            return AlreadyInPlace(pair.destination_path)
        return Transferred(pair.destination_path)

    def transfer_one(self, pair: TransferPair) -> TransferOutcome:
        """Transfer a single pair, resolving name collisions first."""
        source, destination = pair.source_path, pair.destination_path
        if is_same_file(source, destination):
            return AlreadyInPlace(destination)

        try:
            self.ensure_directory(destination.parent)

            final_destination = destination
            if os.path.lexists(destination):
                final_destination = next_available_name(
                    destination, lambda candidate: self._occupied_by_other(source, candidate)
                )
                if is_same_file(source, final_destination):
                    # An earlier run already parked this file under a suffixed name
                    return AlreadyInPlace(final_destination)

            if self.action is Action.MOVE:
                self._move(source, final_destination)
            elif self.action is Action.COPY:
                self._copy(source, final_destination)
            else:
                raise AssertionError(f"Unhandled action: {self.action}")

        except OSError as e:
            return Failed(e)

        return Transferred(final_destination)

    def ensure_directory(self, directory: Path) -> None:
        """Create directory and parents if needed."""
        if not directory.is_dir():
            directory.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _occupied_by_other(source: Path, candidate: Path) -> bool:
        if not os.path.lexists(candidate):
            return False
        return not is_same_file(source, candidate)

    @staticmethod
    def _move(source: Path, dest: Path) -> None:
        try:
            os.rename(source, dest)
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise
            # Rename cannot cross filesystems: copy then drop the source
            shutil.copy2(source, dest)
            os.remove(source)

    @staticmethod
    def _copy(source: Path, dest: Path) -> None:
        shutil.copy2(source, dest)

    def _record(self, stats: StatsManager, pair: TransferPair, outcome: TransferOutcome) -> None:
        """Count and log one outcome."""
        if isinstance(outcome, Transferred):
            stats.increment_transferred()
            if self.dry_run:
                self.logger.debug(f"Would transfer {pair.source_path} -> {outcome.final_path}")
            else:
                self.logger.debug(f"{pair.source_path} -> {outcome.final_path}")
        elif isinstance(outcome, AlreadyInPlace):
            stats.increment_already_organized()
            self.logger.debug(f"Already organized: {outcome.final_path}")
        elif isinstance(outcome, Failed):
            stats.increment_failed()
            self.logger.error(f"Failed to organize {pair.source_path}: {outcome.error}")
        else:
            raise AssertionError(f"Unhandled outcome: {outcome!r}")
