"""Command-line interface for tree2md.

Reads HTML from a file or standard input and writes Markdown to standard
output or a file.

Environment Variable Support
----------------------------
Every option supports an environment variable default named
``TREE2MD_<OPTION_NAME>``, with the option name upper-cased and hyphens
replaced by underscores. ``TREE2MD_CONFIG`` names a configuration file.

Priority, lowest to highest: built-in defaults, configuration file,
environment variables, command-line flags.

Exit Codes
----------
- 0: success
- 1: conversion failed
- 2: invalid arguments, options or configuration
- 3: input or output file error

Examples
--------
Convert a file::

    $ tree2md page.html

Read standard input, write a file::

    $ curl -s https://example.com | tree2md - --out example.md

Reference-style links with dash bullets::

    $ tree2md page.html --link-style reference --bullet-marker -

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any

from tree2md.cli.actions import create_env_aware_argument
from tree2md.cli.config import load_config_with_priority, split_rule_sections
from tree2md.constants import CODE_BLOCK_STYLES, LINK_STYLES
from tree2md.exceptions import FileError, Tree2MdError, ValidationError
from tree2md.logging_utils import configure_logging

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_FILE_ERROR = 3

# CLI destinations that map onto ConversionOptions.from_dict keys
OPTION_DESTS = (
    "bullet_marker",
    "code_fence",
    "code_block_style",
    "em_delimiter",
    "strong_delimiter",
    "strike_delimiter",
    "link_style",
    "max_consecutive_newlines",
    "keep_data_images",
    "html_parser",
)

__all__ = [
    "EXIT_ERROR",
    "EXIT_FILE_ERROR",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "create_parser",
    "get_exit_code_for_exception",
    "main",
]


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a valid integer") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value!r} is negative")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Conversion flags default to ``None`` so that only flags actually given
    (or set through the environment) override the configuration file.
    """
    from tree2md import __version__

    parser = argparse.ArgumentParser(
        prog="tree2md",
        description="Convert HTML to Markdown.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="?", default="-", help="HTML file to convert, or '-' for stdin (default)")
    parser.add_argument("--version", action="version", version=f"tree2md {__version__}")

    io_group = parser.add_argument_group("input and output")
    create_env_aware_argument(io_group, "-o", "--out", dest="out", help="Write Markdown to this file instead of stdout")
    io_group.add_argument("--config", help="Configuration file (JSON, TOML or YAML); overrides TREE2MD_CONFIG")
    create_env_aware_argument(
        io_group, "--no-config", action="store_true", help="Do not search for a configuration file"
    )

    log_group = parser.add_argument_group("logging")
    create_env_aware_argument(
        log_group,
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    create_env_aware_argument(log_group, "--log-file", help="Also write log records to this file")
    create_env_aware_argument(
        log_group, "--trace", action="store_true", help="Debug logging with timestamps and logger names"
    )

    md_group = parser.add_argument_group("markdown options")
    create_env_aware_argument(md_group, "--bullet-marker", help="Marker for unordered list items (default: *)")
    create_env_aware_argument(md_group, "--code-fence", help="Fence for fenced code blocks (default: ```)")
    create_env_aware_argument(
        md_group, "--code-block-style", choices=list(CODE_BLOCK_STYLES), help="Code block style (default: fenced)"
    )
    create_env_aware_argument(md_group, "--em-delimiter", help="Delimiter for emphasis (default: _)")
    create_env_aware_argument(md_group, "--strong-delimiter", help="Delimiter for strong emphasis (default: **)")
    create_env_aware_argument(md_group, "--strike-delimiter", help="Delimiter for strikethrough (default: ~~)")
    create_env_aware_argument(
        md_group,
        "--link-style",
        choices=list(LINK_STYLES),
        help="Inline links or reference links with definitions at the end (default: inline)",
    )
    create_env_aware_argument(
        md_group,
        "--max-consecutive-newlines",
        type=_non_negative_int,
        metavar="N",
        help="Longest allowed run of line breaks (default: 3)",
    )
    create_env_aware_argument(
        md_group,
        "--keep-data-images",
        action="store_true",
        default=None,
        help="Keep images whose source is a data: URI",
    )
    create_env_aware_argument(
        md_group, "--html-parser", help="BeautifulSoup parser backend (default: html.parser)"
    )
    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to a CLI exit code."""
    if isinstance(exception, (ValidationError, argparse.ArgumentTypeError)):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR
    return EXIT_ERROR


def _setup_logging(parsed_args: argparse.Namespace) -> None:
    log_level = logging.DEBUG if parsed_args.trace else parsed_args.log_level
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _cli_option_values(parsed_args: argparse.Namespace) -> dict[str, Any]:
    return {dest: getattr(parsed_args, dest) for dest in OPTION_DESTS if getattr(parsed_args, dest) is not None}


def _build_converter(parsed_args: argparse.Namespace):
    """Combine configuration file and command line into a converter.

    Raises
    ------
    argparse.ArgumentTypeError
        If the configuration file cannot be loaded
    ValidationError
        If the combined options are invalid

    """
    from tree2md.api import Tree2Markdown
    from tree2md.options import ConversionOptions

    config = load_config_with_priority(
        explicit_path=parsed_args.config,
        env_var_path=os.environ.get("TREE2MD_CONFIG"),
        discover=not parsed_args.no_config,
    )
    option_values, rules = split_rule_sections(config)
    option_values.update(_cli_option_values(parsed_args))
    options = ConversionOptions.from_dict(option_values)
    logger.debug("Effective options: %s", options)
    return Tree2Markdown(
        options,
        translators=rules["translators"],
        table_translators=rules["table_translators"],
        code_block_translators=rules["code_block_translators"],
    )


def _read_input(source: str) -> str | bytes:
    """Read HTML from ``source`` (a path or ``-`` for stdin)."""
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    try:
        # Bytes let the parser honour a declared charset
        return path.read_bytes()
    except OSError as e:
        raise FileError(f"Cannot read input file: {e.strerror or e}", file_path=source, original_error=e) from e


def _write_output(markdown: str, out: str | None) -> None:
    if out is None:
        sys.stdout.write(markdown)
        if markdown:
            sys.stdout.write("\n")
        return
    try:
        Path(out).write_text(markdown + "\n" if markdown else "", encoding="utf-8")
    except OSError as e:
        raise FileError(f"Cannot write output file: {e.strerror or e}", file_path=out, original_error=e) from e
    logger.info("Wrote %s", out)


def main(args: list[str] | None = None) -> int:
    """Run the CLI; returns the process exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging(parsed_args)

    try:
        converter = _build_converter(parsed_args)
    except (argparse.ArgumentTypeError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        html = _read_input(parsed_args.input)
        markdown = converter.translate(html)
        _write_output(markdown, parsed_args.out)
    except Tree2MdError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
