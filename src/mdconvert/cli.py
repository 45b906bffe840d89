#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/cli.py
"""Command-line interface for mdconvert.

Examples
--------
Convert a file next to itself (``notes.md`` -> ``notes.html``)::

    $ mdconvert convert notes.md

Choose the output path and embed the stylesheet::

    $ mdconvert convert notes.md site/index.html --css embed

Print the page instead of writing a file::

    $ mdconvert convert notes.md --stdout --title "Meeting notes"

Defaults for every option can be kept in a configuration file; see
:mod:`mdconvert.config`. Flags given on the command line win over the file.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape

from mdconvert import __version__
from mdconvert.api import convert_file, markdown_file_to_html
from mdconvert.config import build_options_from_config, load_config_with_priority
from mdconvert.constants import (
    CONFIG_ENV_VAR,
    EXIT_DECODING_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from mdconvert.exceptions import DecodingError, FileError, MdConvertError, RenderingError, ValidationError
from mdconvert.logging_utils import configure_logging
from mdconvert.options.html import DocumentShellOptions, HtmlRendererOptions
from mdconvert.options.markdown import MarkdownParserOptions

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with its ``convert`` subcommand."""
    parser = argparse.ArgumentParser(
        prog="mdconvert",
        description="Convert Markdown documents to styled, self-contained HTML pages.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    convert = subparsers.add_parser(
        "convert",
        help="Convert a Markdown file to HTML",
        description="Convert a Markdown file to a standalone HTML page.",
    )
    convert.add_argument("input", help="Markdown file to convert")
    convert.add_argument("output", nargs="?", help="Output HTML file (default: input path with a .html extension)")
    convert.add_argument("--stdout", action="store_true", help="Write the HTML page to standard output")

    page = convert.add_argument_group("page options")
    page.add_argument(
        "--css",
        dest="css_mode",
        choices=("link", "embed", "none"),
        help="Link the GitHub stylesheet, embed it in the page, or emit none",
    )
    page.add_argument("--css-url", help="Stylesheet URL used with --css link")
    page.add_argument("--title", help="Page title (default: front matter title, then the file name)")
    page.add_argument("--lang", dest="language", help="Value of the <html lang> attribute")

    html = convert.add_argument_group("rendering options")
    html.add_argument(
        "--heading-ids",
        action="store_true",
        default=None,
        help="Add GitHub-style id attributes to headings",
    )
    html.add_argument(
        "--soft-break",
        choices=("newline", "space", "br"),
        help="How a line break inside a paragraph is written",
    )

    markdown = convert.add_argument_group("markdown options")
    markdown.add_argument(
        "--no-frontmatter",
        dest="parse_frontmatter",
        action="store_false",
        default=None,
        help="Treat a leading --- block as ordinary Markdown",
    )

    general = convert.add_argument_group("configuration and logging")
    general.add_argument("--config", help=f"Configuration file (default: ${CONFIG_ENV_VAR}, then auto-discovery)")
    general.add_argument("--no-config", action="store_true", help="Ignore configuration files")
    general.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    general.add_argument("--log-file", help="Also write log records to this file")
    general.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    general.add_argument("--rich", action="store_true", help="Format log output with rich")

    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to the CLI exit code for its kind of failure."""
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR
    if isinstance(exception, DecodingError):
        return EXIT_DECODING_ERROR
    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR
    return EXIT_ERROR


def _print_error(message: str) -> None:
    Console(stderr=True).print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True, highlight=False)


def _setup_logging(parsed_args: argparse.Namespace) -> None:
    # --trace takes precedence over --log-level
    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level)
    configure_logging(
        log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
        rich_output=parsed_args.rich,
    )


def _cli_overrides(parsed_args: argparse.Namespace, names: tuple[str, ...]) -> dict[str, Any]:
    overrides = {}
    for name in names:
        value = getattr(parsed_args, name)
        if value is not None:
            overrides[name] = value
    return overrides


def build_options(
    parsed_args: argparse.Namespace,
) -> tuple[MarkdownParserOptions, HtmlRendererOptions, DocumentShellOptions]:
    """Combine configuration file values with command-line flags.

    Raises
    ------
    ValidationError
        If the configuration file cannot be loaded or holds invalid values

    """
    config: dict[str, Any] = {}
    if not parsed_args.no_config:
        try:
            config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
        except argparse.ArgumentTypeError as e:
            raise ValidationError(str(e), parameter_name="config", parameter_value=parsed_args.config) from e

    parser_options, renderer_options, shell_options = build_options_from_config(config)

    parser_options = parser_options.create_updated(**_cli_overrides(parsed_args, ("parse_frontmatter",)))
    renderer_options = renderer_options.create_updated(**_cli_overrides(parsed_args, ("heading_ids", "soft_break")))
    try:
        shell_options = shell_options.create_updated(
            **_cli_overrides(parsed_args, ("css_mode", "css_url", "title", "language"))
        )
    except ValueError as e:
        raise ValidationError(str(e), original_error=e) from e
    return parser_options, renderer_options, shell_options


def run_convert(parsed_args: argparse.Namespace) -> int:
    """Run the ``convert`` subcommand and return its exit code."""
    try:
        parser_options, renderer_options, shell_options = build_options(parsed_args)
        if parsed_args.stdout:
            page = markdown_file_to_html(
                parsed_args.input,
                parser_options=parser_options,
                renderer_options=renderer_options,
                shell_options=shell_options,
            )
            sys.stdout.write(page)
        else:
            written = convert_file(
                parsed_args.input,
                parsed_args.output,
                parser_options=parser_options,
                renderer_options=renderer_options,
                shell_options=shell_options,
            )
            logger.info("Wrote %s", written)
    except MdConvertError as e:
        logger.debug("Conversion failed", exc_info=True)
        _print_error(e.message)
        return get_exit_code_for_exception(e)
    return EXIT_SUCCESS


def main(args: Optional[list[str]] = None) -> int:
    """Execute the mdconvert command line."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.command is None:
        parser.print_help(sys.stderr)
        return EXIT_VALIDATION_ERROR

    if parsed_args.stdout and parsed_args.output:
        _print_error("--stdout cannot be combined with an output path")
        return EXIT_VALIDATION_ERROR

    _setup_logging(parsed_args)
    return run_convert(parsed_args)


__all__ = ["build_options", "create_parser", "get_exit_code_for_exception", "main", "run_convert"]


if __name__ == "__main__":
    sys.exit(main())
