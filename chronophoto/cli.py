"""
Command-line interface for chronophoto.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .config import Action, Config, Mode, RunConfig
from .constants import MAX_LIMIT, PROGRAM, get_console
from .core import LibraryOrganizer
from .exceptions import ChronophotoError


def parse_limit(limit_str: str) -> int:
    """Convert a photos-per-month limit to a non-negative integer."""
    try:
        limit = int(limit_str)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid limit: {limit_str}")
    if limit < 0:
        raise argparse.ArgumentTypeError(f"Limit must not be negative: {limit_str}")
    if limit > MAX_LIMIT:
        raise argparse.ArgumentTypeError(f"Limit must not exceed {MAX_LIMIT}: {limit_str}")
    return limit


def create_parser(config: Config) -> argparse.ArgumentParser:
    """Create argument parser with dynamic defaults from config."""
    last_source = config.get_last_source()
    last_library = config.get_last_library()

    source_help = "Directory containing photos to organize"
    library_help = "Root folder of the photo library"
    if last_source:
        source_help += f" (default: {last_source})"
    if last_library:
        library_help += f" (default: {last_library})"

    parser = argparse.ArgumentParser(
        prog=PROGRAM,
        description="Organize photos into a date-structured library using EXIF capture time",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Modes:
  daily    YYYY/MM/DD folders
  monthly  YYYY/MM folders
  compact  YYYY/MM, or YYYY/MM/DD for months holding more than --limit photos
  flat     everything directly in the library root

Examples:
  {PROGRAM} ~/Downloads/Camera ~/Pictures/Library
  {PROGRAM} ~/Downloads/Camera ~/Pictures/Library --mode compact --limit 40
  {PROGRAM} ~/Pictures/Library ~/Pictures/Library --rename --dry-run
        """
    )

    parser.add_argument("source", nargs="?", help=source_help)
    parser.add_argument("library", nargs="?", help=library_help)
    parser.add_argument(
        "--mode", "-m", choices=[m.value for m in Mode], default=None,
        help=f"Folder structure pattern (default: {config.get_mode()})"
    )
    parser.add_argument(
        "--limit", "-n", type=parse_limit, default=None, metavar="N",
        help=f"Max photos per month in compact mode (default: {config.get_limit()})"
    )
    parser.add_argument(
        "--rename", "-r", action=argparse.BooleanOptionalAction, default=None,
        help=f"Rename files to YYYYMMDD_hhmmss format (default: {'on' if config.get_rename() else 'off'})"
    )
    parser.add_argument(
        "--action", "-a", choices=[a.value for a in Action], default=None,
        help=f"File operation (default: {config.get_action()})"
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Preview changes without modifying files"
    )
    parser.add_argument(
        "--log-file", "-l", type=Path, metavar="PATH",
        help="Write log records to PATH and show a progress bar instead"
    )
    parser.add_argument(
        "--yes", "-y", action="store_true",
        help="Auto-confirm processing for saved source/library paths"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--version", "-V", action="store_true",
        help=f"Display the version number of {PROGRAM} and exit"
    )

    return parser


def show_processing_plan(run_config: RunConfig, console: Console) -> None:
    """Display the processing plan before execution."""
    action = "DRY RUN" if run_config.dry_run else run_config.action.value.upper()

    console.print("\n[bold]Processing Plan:[/bold]")
    console.print(f"  Source:          [blue]{escape(str(run_config.source_dir))}[/blue]", soft_wrap=True)
    console.print(f"  Library:         [blue]{escape(str(run_config.library_root))}[/blue]", soft_wrap=True)
    console.print(f"  Organize Mode:   [cyan]{run_config.mode.value}[/cyan]")
    if run_config.mode is Mode.COMPACT:
        console.print(f"  Monthly Limit:   [cyan]{run_config.monthly_limit}[/cyan]")
    console.print(f"  Processing Mode: [cyan]{action}[/cyan]")
    console.print(f"  Rename Files:    [cyan]{'Yes' if run_config.rename else 'No'}[/cyan]")
    if run_config.log_file:
        console.print(f"  Log File:        [blue]{escape(str(run_config.log_file))}[/blue]", soft_wrap=True)
    console.print()


def confirm_processing(console: Console) -> bool:
    """Ask for confirmation when using saved configuration."""
    console.print("[yellow]Confirm processing plan with saved configuration.[/yellow]")

    try:
        response = console.input("Continue? [y/N]: ").strip().lower()
        return response in ['y', 'yes']
    except (EOFError, KeyboardInterrupt):
        console.print("\n[red]Operation cancelled[/red]")
        return False


def main(config_path: Optional[Path] = None) -> int:
    """Main entry point.

    Args:
        config_path: Optional path to config file (for testing)
    """
    config = Config(config_path=config_path)
    parser = create_parser(config)
    args = parser.parse_args()

    if args.version:
        from . import __version__
        print(__version__)
        if args.verbose:
            print(f"Config: {config.config_path}")
        return 0

    using_saved_config = args.source is None and args.library is None

    source_path = args.source or config.get_last_source()
    library_path = args.library or config.get_last_library()
    if not source_path or not library_path:
        parser.error("Source and library directories are required")

    source = Path(source_path).expanduser().resolve()
    library = Path(library_path).expanduser().resolve()

    try:
        run_config = RunConfig(
            source_dir=source,
            library_root=library,
            mode=Mode.parse(args.mode or config.get_mode()),
            monthly_limit=args.limit if args.limit is not None else config.get_limit(),
            rename=args.rename if args.rename is not None else config.get_rename(),
            action=Action.parse(args.action or config.get_action()),
            dry_run=args.dry_run,
            log_file=args.log_file.expanduser() if args.log_file else None,
            verbose=args.verbose,
        )
    except ValueError as e:
        # Saved preferences are the only source of values argparse did not vet
        print(f"Error: {e} (check {config.config_path})")
        return 1

    console = get_console()
    show_processing_plan(run_config, console)

    if using_saved_config and not args.yes:
        if not confirm_processing(console):
            return 0

    try:
        summary = LibraryOrganizer(run_config, console=console).run()
    except ChronophotoError as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        console.print("\n[red]Operation cancelled by user[/red]")
        return 1

    config.update_paths(str(source), str(library))
    config.update_preferences(mode=args.mode, limit=args.limit,
                              rename=args.rename, action=args.action)

    print(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
