"""
Run configuration and persisted user preferences for chronophoto.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import DEFAULT_ACTION, DEFAULT_LIMIT, DEFAULT_MODE, MAX_LIMIT, PROGRAM


class Mode(Enum):
    """Folder layout used below the library root."""

    DAILY = "daily"
    MONTHLY = "monthly"
    COMPACT = "compact"
    FLAT = "flat"

    @classmethod
    def parse(cls, name: str) -> "Mode":
        try:
            return cls(str(name).lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Invalid mode '{name}'. Valid modes: {valid}") from None


class Action(Enum):
    """How a file reaches its destination."""

    MOVE = "move"
    COPY = "copy"

    @classmethod
    def parse(cls, name: str) -> "Action":
        try:
            return cls(str(name).lower())
        except ValueError:
            valid = ", ".join(a.value for a in cls)
            raise ValueError(f"Invalid action '{name}'. Valid actions: {valid}") from None


@dataclass(frozen=True)
class RunConfig:
    """Settings for a single organize run, read-only once built."""

    source_dir: Path
    library_root: Path
    mode: Mode = Mode(DEFAULT_MODE)
    monthly_limit: int = DEFAULT_LIMIT
    rename: bool = False
    action: Action = Action(DEFAULT_ACTION)
    dry_run: bool = False
    log_file: Optional[Path] = None
    verbose: bool = False

    def __post_init__(self):
        if self.monthly_limit < 0:
            raise ValueError(f"Monthly limit must not be negative: {self.monthly_limit}")
        if self.monthly_limit > MAX_LIMIT:
            raise ValueError(f"Monthly limit must not exceed {MAX_LIMIT}: {self.monthly_limit}")


class Config:
    """Manages configuration file for storing user preferences."""

    def __init__(self, config_path: Optional[Path] = None):
        # Default config location: ~/.<PROGRAM>/config.yml
        if config_path:
            self.config_path = Path(config_path)
        else:
            self.config_path = Path.home() / f".{PROGRAM}" / "config.yml"
        self.program_root = self.config_path.parent
        self.data = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logging.getLogger(PROGRAM).warning(f"Could not load config: {e}")
            return {}

        if not isinstance(data, dict):
            logging.getLogger(PROGRAM).warning(f"Ignoring malformed config: {self.config_path}")
            return {}
        return data

    def save_config(self) -> None:
        """Save current configuration to file."""
        try:
            self.program_root.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w') as f:
                yaml.safe_dump(self.data, f, default_flow_style=False)
        except OSError as e:
            logging.getLogger(PROGRAM).error(f"Could not save config: {e}")

    def get_last_source(self) -> Optional[str]:
        """Get the last used source directory."""
        return self.data.get('last_source')

    def get_last_library(self) -> Optional[str]:
        """Get the last used library root."""
        return self.data.get('last_library')

    def get_mode(self) -> str:
        return self.data.get('mode', DEFAULT_MODE)

    def get_limit(self) -> int:
        value = self.data.get('limit', DEFAULT_LIMIT)
        try:
            return int(value)
        except (TypeError, ValueError):
            logging.getLogger(PROGRAM).warning(f"Ignoring invalid limit in config: {value!r}")
            return DEFAULT_LIMIT

    def get_action(self) -> str:
        return self.data.get('action', DEFAULT_ACTION)

    def get_rename(self) -> bool:
        return bool(self.data.get('rename', False))

    def update_paths(self, source: str, library: str) -> None:
        """Update and save the last used paths."""
        self.data['last_source'] = source
        self.data['last_library'] = library
        self.save_config()

    def update_preferences(self, **preferences: Any) -> None:
        """Save explicitly chosen options; None values are left untouched."""
        changed = {k: v for k, v in preferences.items() if v is not None}
        if not changed:
            return
        self.data.update(changed)
        self.save_config()
