"""
pytest configuration and fixtures for chronophoto tests.
"""

import io
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import pytest
from PIL import Image

from chronophoto.config import RunConfig
from chronophoto.constants import PROGRAM

# EXIF tag id of the primary image DateTime field
DATETIME_TAG_ID = 306


@dataclass
class CliResult:
    """Result from running CLI command."""
    exit_code: int
    output: str
    error: str


@pytest.fixture(autouse=True)
def reset_program_logger():
    """Close handlers installed by a run so log files are released between tests."""
    yield
    logger = logging.getLogger(PROGRAM)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def source_dir(tmp_path):
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def library_dir(tmp_path):
    """Library root; deliberately not created so runs must create it on demand."""
    return tmp_path / "library"


@pytest.fixture
def test_config_path(tmp_path):
    """Isolated config.yml location for CLI tests."""
    return tmp_path / "config" / "config.yml"


@pytest.fixture
def make_photo():
    """Write a small JPEG, optionally carrying an EXIF DateTime value."""

    def create(path: Path, taken: Optional[str] = None,
               color: Tuple[int, int, int] = (120, 80, 40)) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        image = Image.new("RGB", (16, 16), color)
        if taken is None:
            image.save(path, format="JPEG")
        else:
            exif = Image.Exif()
            exif[DATETIME_TAG_ID] = taken
            image.save(path, format="JPEG", exif=exif.tobytes())
        return path

    return create


@pytest.fixture
def make_run_config(source_dir, library_dir):
    """Build a RunConfig for the fixture directories with overrides."""

    def build(**overrides) -> RunConfig:
        settings = dict(source_dir=source_dir, library_root=library_dir)
        settings.update(overrides)
        return RunConfig(**settings)

    return build


@pytest.fixture
def cli_runner():
    """Create a CLI runner that captures output and uses test config."""

    def run_cli(*args, config_path=None, answer="n"):
        """Run chronophoto CLI with given arguments.

        Args:
            *args: Command line arguments (source, library, --flags, etc)
            config_path: Optional config path for test isolation
            answer: Reply given to the saved-configuration confirmation prompt

        Returns:
            CliResult with exit_code, output, and error
        """
        from chronophoto.cli import main
        from chronophoto.constants import get_console

        old_stdout = sys.stdout
        old_stderr = sys.stderr
        old_argv = sys.argv
        stdout = io.StringIO()
        stderr = io.StringIO()

        console = get_console()
        had_override = 'input' in vars(console)
        original_input = vars(console).get('input')

        try:
            sys.stdout = stdout
            sys.stderr = stderr
            console.input = lambda prompt="": answer
            sys.argv = [PROGRAM] + [str(a) for a in args]

            exit_code = main(config_path=config_path)

            return CliResult(exit_code=exit_code, output=stdout.getvalue(),
                             error=stderr.getvalue())
        except SystemExit as e:
            return CliResult(
                exit_code=e.code if e.code is not None else 0,
                output=stdout.getvalue(),
                error=stderr.getvalue()
            )
        finally:
            sys.stdout = old_stdout
            sys.stderr = old_stderr
            sys.argv = old_argv
            if had_override:
                console.input = original_input
            else:
                del console.input

    return run_cli


@pytest.fixture
def assert_file_structure():
    """Helper to assert expected file structure."""

    def check_structure(base_path: Path, expected_structure: dict):
        """Assert that directory has expected structure.

        Args:
            base_path: Root directory to check
            expected_structure: Dict describing expected structure
                e.g., {
                    "2025": {
                        "06": {"15": ["photo1.jpg"]},
                        "01": ["photo2"]
                    }
                }
        """
        def check_level(path: Path, structure: dict):
            for name, value in structure.items():
                item_path = path / name
                assert item_path.exists(), f"Expected {item_path} to exist"
                assert item_path.is_dir(), f"Expected {item_path} to be a directory"

                if isinstance(value, dict):
                    check_level(item_path, value)
                else:
                    actual_files = sorted(f.name for f in item_path.iterdir() if f.is_file())
                    assert actual_files == sorted(value), \
                        f"Expected files {sorted(value)} in {item_path}, got {actual_files}"

        check_level(base_path, expected_structure)

    return check_structure
