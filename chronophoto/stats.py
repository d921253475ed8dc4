"""
Outcome counters and run summary for organize operations.
"""

from typing import Dict


class StatsManager:
    """Encapsulates outcome counters for a run."""

    def __init__(self):
        self._stats = {
            'discovered': 0,
            'transferred': 0,
            'already_organized': 0,
            'skipped': 0,
            'failed': 0,
        }

    def increment_transferred(self) -> None:
        """Increment when a file reached (or in dry-run would reach) the library."""
        self._stats['transferred'] += 1

    def increment_already_organized(self) -> None:
        """Increment when a file already sits at its library location."""
        self._stats['already_organized'] += 1

    def increment_failed(self) -> None:
        """Increment when a transfer raised a filesystem error."""
        self._stats['failed'] += 1

    def record_discovery(self, discovered: int, planned: int) -> None:
        """Record discovered files; those never planned were skipped for missing EXIF."""
        self._stats['discovered'] = discovered
        self._stats['skipped'] = discovered - planned

    def get_stats(self) -> Dict[str, int]:
        """Get a copy of current statistics."""
        return self._stats.copy()

    def format_summary(self, dry_run: bool) -> str:
        """Render the one-line run summary."""
        s = self._stats
        if dry_run:
            return (f"[DRY RUN] Processed {s['discovered']} files: "
                    f"{s['transferred']} would be transferred, "
                    f"{s['already_organized']} were already organized, "
                    f"{s['skipped']} skipped (no EXIF)")
        return (f"Processed {s['discovered']} files: "
                f"{s['transferred']} transferred, "
                f"{s['already_organized']} were already organized, "
                f"{s['skipped']} skipped (no EXIF), "
                f"{s['failed']} failed")

    # Individual stat getters for reporting
    def get_transferred(self) -> int:
        return self._stats['transferred']

    def get_already_organized(self) -> int:
        return self._stats['already_organized']

    def get_failed(self) -> int:
        return self._stats['failed']
