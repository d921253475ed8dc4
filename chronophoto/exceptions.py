"""
Fatal error types for chronophoto.

Per-file problems never surface as these exceptions; they are logged and
counted. Anything raised from here aborts the run.
"""


class ChronophotoError(Exception):
    """Base exception for errors that stop a run."""
    pass


class SetupError(ChronophotoError):
    """Raised when pre-flight checks fail before any file is touched."""
    pass


class PlanningError(ChronophotoError):
    """Raised when a path lacks a component that planning relies on."""
    pass
