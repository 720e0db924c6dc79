"""Command-line interface for famlyeml.

This module provides the CLI commands for parsing Famly enrollment emails
and exporting the result as JSON.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from famlyeml.config import EML_EXTENSION, JSON_SECTIONS, get_config
from famlyeml.log_setup import setup_logging
from famlyeml.parsers.base import EnrollmentParseError
from famlyeml.services.enrollment_parser import extract_fields, parse_eml_file, read_eml_file
from famlyeml.services.record_export import record_section, to_json, write_json
from famlyeml.version import format_version_string

__all__ = ["cli_main"]


def print_version() -> None:
    """Print version information."""
    print(format_version_string())


def _check_eml_path(path: str) -> bool:
    if not path.lower().endswith(EML_EXTENSION):
        print("✗ Please select a valid EML file.")
        return False
    return True


def _option(flags: list[str], *names: str) -> str | None:
    """Value following the first of ``names`` in flags, if present."""
    for i, flag in enumerate(flags):
        if flag in names and i + 1 < len(flags):
            return flags[i + 1]
    return None


def cmd_parse(path: str, section: str = "all", output: str | None = None) -> int:
    """Parse an EML file and print (or write) the record as JSON.

    Args:
        path: EML file to parse
        section: Record section to output
        output: Optional file to write instead of printing

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if not _check_eml_path(path):
        return 1
    if section not in JSON_SECTIONS:
        print(f"✗ Unknown section: {section} (expected one of {', '.join(JSON_SECTIONS)})")
        return 1

    config = get_config()
    try:
        record = parse_eml_file(path)
    except EnrollmentParseError as e:
        print(f"✗ Failed to parse EML file: {e}")
        return 1

    data = record_section(record, section)
    if output:
        out_path = write_json(data, output, indent=config.json_indent)
        print(f"✓ EML file parsed successfully: {out_path}", file=sys.stderr)
    else:
        print(to_json(data, indent=config.json_indent))
    return 0


def cmd_export(path: str) -> int:
    """Parse an EML file and write the full record to the export folder.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    config = get_config()
    output = Path(config.export_dir) / config.export_filename
    return cmd_parse(path, section="all", output=str(output))


def cmd_fields(path: str) -> int:
    """Print the raw question/answer table of an EML file.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if not _check_eml_path(path):
        return 1

    try:
        table = extract_fields(read_eml_file(path))
    except EnrollmentParseError as e:
        print(f"✗ Failed to parse EML file: {e}")
        return 1

    print(to_json(table.to_dict(), indent=get_config().json_indent))
    return 0


def cmd_serve() -> int:
    """Start the HTTP API server.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        from famlyeml.main import main as run_app
        run_app()
        return 0
    except Exception as e:
        logger.exception("Server error")
        print(f"✗ Server error: {e}", file=sys.stderr)
        return 1


def print_help() -> None:
    """Print CLI help message."""
    print_version()
    print()
    print("Usage: famlyeml [COMMAND] [FILE] [OPTIONS]")
    print()
    print("Commands:")
    print("  parse FILE      Parse an EML file and print the record as JSON")
    print("  export FILE     Parse an EML file and write JSON to the export folder")
    print("  fields FILE     Print the raw question/answer table of an EML file")
    print("  serve           Start the HTTP API server")
    print("  version         Show version information")
    print("  help            Show this help message")
    print()
    print("Options (parse):")
    print(f"  --section NAME  One of: {', '.join(JSON_SECTIONS)} (default: all)")
    print("  -o, --output    Write JSON to this file instead of printing it")
    print()
    print("Examples:")
    print("  famlyeml parse enrollment.eml")
    print("  famlyeml parse enrollment.eml --section contacts")
    print("  famlyeml export enrollment.eml")
    print()


def cli_main(args: Optional[list[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    if args is None:
        args = sys.argv[1:]

    # No command or help
    if not args or args[0] in ("help", "-h", "--help"):
        print_help()
        return 0

    command = args[0].lower()

    if command == "version":
        print_version()
        return 0
    elif command == "serve":
        return cmd_serve()

    if command not in ("parse", "export", "fields"):
        print(f"✗ Unknown command: {command}")
        print()
        print_help()
        return 1

    if len(args) < 2:
        print(f"✗ Missing EML file for {command}")
        return 1

    setup_logging()
    path = args[1]
    flags = args[2:]
    logger.debug(f"Running {command} on {path}")

    # Execute command
    if command == "parse":
        section = _option(flags, "--section", "-s") or "all"
        return cmd_parse(path, section=section, output=_option(flags, "--output", "-o"))
    elif command == "export":
        return cmd_export(path)
    else:
        return cmd_fields(path)
