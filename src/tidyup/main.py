"""Main entry point for tidyup."""

from __future__ import annotations

import argparse
import fileinput
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import TidyConfig
from .sizes import humanize_lines

__version__ = "0.3.0"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments without the program name. Uses sys.argv if None.

    Returns:
        Parsed arguments.

    """
    parser = argparse.ArgumentParser(
        prog="tidyup",
        description="Suggest (never run) cleanup commands for a directory tree",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every suggestion as it is found",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Scan command (default)
    scan_parser = subparsers.add_parser("scan", help="Scan a tree and write the advisory script")
    _add_scan_arguments(scan_parser)

    # Config command
    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_parser.add_argument(
        "--init",
        action="store_true",
        help="Create default configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        help="Show current configuration",
    )

    # Humanize command
    humanize_parser = subparsers.add_parser(
        "humanize",
        help="Rewrite long numbers in text as sizes (e.g. du -b output)",
    )
    humanize_parser.add_argument(
        "--min-digits",
        type=int,
        default=4,
        help="Only rewrite numbers with at least this many digits",
    )
    humanize_parser.add_argument("files", nargs="*", help="Input files (default: stdin)")

    args = parser.parse_args(_default_to_scan(argv if argv is not None else sys.argv[1:], subparsers.choices))
    if args.command == "humanize" and args.min_digits < 1:
        parser.error("--min-digits must be at least 1")
    return args


def _default_to_scan(argv: list[str], commands: dict[str, argparse.ArgumentParser]) -> list[str]:
    """Insert "scan" where the subcommand would go if none was given.

    Both `tidyup` and `tidyup DIR` mean `tidyup scan [DIR]`.
    """
    argv = list(argv)
    i = 0
    while i < len(argv) and argv[i].startswith("-") and argv[i] != "--":
        # --config takes a separate value unless written as --config=PATH
        i += 2 if argv[i] in ("-c", "--config") else 1
    if i >= len(argv) or argv[i] not in commands:
        argv.insert(min(i, len(argv)), "scan")
    return argv


def _add_scan_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        type=Path,
        nargs="?",
        default=None,
        help="Directory to scan (default: current directory)",
    )
    parser.add_argument(
        "--no-types",
        action="store_true",
        help="Skip file(1) classification; list all files in one bucket",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Where to write the report (default: from config)",
    )


def _print_config_error(error: ValueError) -> None:
    Console(stderr=True).print(f"[red]Configuration error: {escape(str(error))}[/red]")


def cmd_scan(config: TidyConfig, args: argparse.Namespace) -> int:
    """Execute scan command.

    Args:
        config: Tidy configuration.
        args: Parsed arguments.

    Returns:
        Exit code.

    """
    from .advisor import TidyAdvisor

    console = Console()
    root = (args.root or Path.cwd()).resolve()
    if not root.is_dir():
        console.print(f"[red]Not a directory: {root}[/red]")
        return 1

    if args.no_types:
        config.classify = False
    if args.verbose:
        config.log_level = "DEBUG"

    try:
        advisor = TidyAdvisor(config)
    except ValueError as e:
        _print_config_error(e)
        return 2

    result = advisor.run(root, args.output)

    if result.suggestion_count:
        print(f"{result.suggestion_count} suggestions written to {result.output_path}")
    else:
        print(f"No suggestions; inventory written to {result.output_path}")
    return 0


def cmd_config(config: TidyConfig, args: argparse.Namespace) -> int:
    """Execute config command.

    Args:
        config: Tidy configuration.
        args: Parsed arguments.

    Returns:
        Exit code.

    """
    console = Console()

    if args.init:
        config_path = args.config or TidyConfig.get_config_path()
        if config_path.exists():
            console.print(f"[yellow]Config already exists: {config_path}[/yellow]")
            return 1
        config.save(config_path)
        console.print(f"[green]Created config: {config_path}[/green]")
        return 0

    if args.show:
        table = Table(title="Current Configuration")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("Classify types", str(config.classify))
        table.add_row("Freshness guard", f"{config.freshness_days} days")
        table.add_row("Stale binaries after", f"{config.old_binary_days} days")
        table.add_row("Output file", str(config.output_file))
        table.add_row("file command", config.file_command)
        table.add_row("git command", config.git_command)
        table.add_row("Loose object threshold", str(config.loose_object_threshold))
        table.add_row("Disabled rules", ", ".join(config.rules_disabled) or "-")
        table.add_row("Log file", str(config.log_file) if config.log_file else "-")
        table.add_row("Log level", config.log_level)

        console.print(table)
        return 0

    console.print("[yellow]Use --init or --show[/yellow]")
    return 1


def cmd_humanize(args: argparse.Namespace) -> int:
    """Execute humanize command: a line filter from files or stdin."""
    with fileinput.input(files=args.files or ("-",)) as lines:
        for line in humanize_lines(lines, args.min_digits):
            sys.stdout.write(line)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code.

    """
    args = parse_args(argv)

    if args.command == "humanize":
        return cmd_humanize(args)

    try:
        config = TidyConfig.load(args.config)
    except ValueError as e:
        _print_config_error(e)
        return 2

    if args.command == "scan":
        return cmd_scan(config, args)
    elif args.command == "config":
        return cmd_config(config, args)

    print(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
