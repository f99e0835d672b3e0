"""Command-line interface for the htmlmark HTML to Markdown converter.

Examples
--------
Convert a file and print the Markdown:
    $ htmlmark page.html

Write to a file:
    $ htmlmark page.html --out page.md

Convert several files into a directory:
    $ htmlmark *.html --output-dir ./markdown

Read from stdin and use basic Markdown only:
    $ curl -s https://example.com | htmlmark - --no-extended-syntax

Render the result in the terminal:
    $ htmlmark page.html --rich

Use environment variables for defaults:
    $ export HTMLMARK_LOG_LEVEL=DEBUG
    $ export HTMLMARK_PARSER=lxml
    $ htmlmark page.html
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import List, Optional

from htmlmark import __version__
from htmlmark.api import convert, convert_file
from htmlmark.cli_builder import DynamicCLIBuilder
from htmlmark.constants import DEFAULT_LOG_LEVEL
from htmlmark.exceptions import DependencyError, HtmlMarkError
from htmlmark.logging_utils import configure_logging

logger = logging.getLogger(__name__)

ENV_PREFIX = "HTMLMARK_"
STDIN_MARKER = "-"

EXIT_SUCCESS = 0
EXIT_ERROR = 1

_TRUTHY = ("true", "1", "yes", "on")


def get_env_var_value(key: str) -> Optional[str]:
    """Get an environment variable with the HTMLMARK_ prefix.

    Parameters
    ----------
    key : str
        The argument destination (e.g., 'log_level', 'output_dir')

    Returns
    -------
    Optional[str]
        Environment variable value or None if not set

    """
    env_key = f"{ENV_PREFIX}{key.upper().replace('-', '_')}"
    return os.environ.get(env_key)


def apply_env_vars_to_parser(parser: argparse.ArgumentParser) -> None:
    """Apply environment variables as defaults to parser arguments.

    Arguments given on the command line still take precedence. Boolean flags
    read the variable as the value of the underlying setting, so
    ``HTMLMARK_EXTENDED_SYNTAX=false`` has the same effect as
    ``--no-extended-syntax``.
    """
    for action in parser._actions:
        if not action.dest or action.dest in ("help", "version", "input"):
            continue

        env_value = get_env_var_value(action.dest)
        if env_value is None:
            continue

        env_name = f"{ENV_PREFIX}{action.dest.upper()}"
        if isinstance(action, (argparse._StoreTrueAction, argparse._StoreFalseAction)):
            action.default = env_value.strip().lower() in _TRUTHY
        elif action.type is int:
            try:
                action.default = int(env_value)
            except ValueError:
                logger.warning(f"Invalid integer value for {env_name}: {env_value}")
        elif action.choices:
            if env_value in action.choices:
                action.default = env_value
            else:
                logger.warning(f"Invalid choice for {env_name}: {env_value}. Choices: {list(action.choices)}")
        else:
            action.default = env_value


def _get_version() -> str:
    """Get the installed version of htmlmark."""
    try:
        return version("htmlmark")
    except PackageNotFoundError:
        return __version__


def create_parser(builder: Optional[DynamicCLIBuilder] = None) -> argparse.ArgumentParser:
    """Create the argument parser, with option flags generated from ``ConversionOptions``."""
    builder = builder or DynamicCLIBuilder()
    parser = argparse.ArgumentParser(
        prog="htmlmark",
        description="Convert HTML to Markdown (GitHub Flavored Markdown by default)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  htmlmark page.html
  htmlmark page.html --out page.md
  htmlmark *.html --output-dir ./markdown
  cat page.html | htmlmark - --no-extended-syntax

Every option can also be set through an HTMLMARK_<OPTION> environment
variable, e.g. HTMLMARK_PARSER=lxml or HTMLMARK_LOG_LEVEL=DEBUG.
        """,
    )

    parser.add_argument("input", nargs="*", help="HTML files to convert (use '-' or omit to read from stdin)")
    parser.add_argument("--out", "-o", help="Output file path (single input only; default: print to stdout)")
    parser.add_argument("--output-dir", help="Directory that receives one .md file per input")

    builder.add_options_arguments(parser, group_name="Conversion options")

    parser.add_argument("--rich", action="store_true", help="Render the Markdown in the terminal with rich")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=DEFAULT_LOG_LEVEL,
        help=f"Set logging level (default: {DEFAULT_LOG_LEVEL})",
    )
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Verbose debug logging with timestamps and logger names")
    parser.add_argument("--version", "-v", action="version", version=f"htmlmark {_get_version()}")

    apply_env_vars_to_parser(parser)
    return parser


def generate_output_path(input_name: str, output_dir: Path) -> Path:
    """Output path for one input inside ``output_dir``."""
    stem = "stdin" if input_name == STDIN_MARKER else Path(input_name).stem
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / f"{stem}.md"


def convert_input(input_name: str, options: dict) -> str:
    """Convert one input path, or stdin for ``-``."""
    if input_name == STDIN_MARKER:
        logger.debug("Reading HTML from stdin")
        return convert(sys.stdin.read(), **options)
    return convert_file(Path(input_name), **options)


def print_rich(markdown_content: str) -> None:
    """Render Markdown to the terminal using rich.

    Raises
    ------
    DependencyError
        If rich is not installed

    """
    try:
        from rich.console import Console
        from rich.markdown import Markdown
    except ImportError as e:
        raise DependencyError(
            "Rich output",
            missing_packages=["rich"],
            message="Rich output requires the optional 'rich' dependency. Install with: pip install htmlmark[rich]",
            original_error=e,
        ) from e

    Console().print(Markdown(markdown_content))


def write_output(markdown_content: str, output_path: Optional[Path], use_rich: bool) -> None:
    """Write converted Markdown to a file, or to stdout."""
    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(markdown_content, encoding="utf-8")
        logger.info("Wrote %s", output_path)
    elif use_rich:
        print_rich(markdown_content)
    else:
        print(markdown_content)


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Parameters
    ----------
    args : list of str, optional
        Command line arguments; defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Exit code: 0 when every input converted, 1 otherwise

    """
    builder = DynamicCLIBuilder()
    parser = create_parser(builder)
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    inputs = parsed_args.input or [STDIN_MARKER]
    if inputs.count(STDIN_MARKER) > 1:
        print("Error: stdin ('-') can only be given once", file=sys.stderr)
        return EXIT_ERROR

    output_dir = Path(parsed_args.output_dir) if parsed_args.output_dir else None
    if output_dir is not None and output_dir.exists() and not output_dir.is_dir():
        print(f"Error: --output-dir must be a directory, not a file: {output_dir}", file=sys.stderr)
        return EXIT_ERROR

    out_path = Path(parsed_args.out) if parsed_args.out else None
    if out_path is not None and len(inputs) > 1:
        print("Error: --out accepts a single input. Use --output-dir for several files.", file=sys.stderr)
        return EXIT_ERROR

    options = builder.map_args_to_options(parsed_args)
    exit_code = EXIT_SUCCESS

    for input_name in inputs:
        try:
            markdown_content = convert_input(input_name, options)
            output_path = out_path
            if output_path is None and output_dir is not None:
                output_path = generate_output_path(input_name, output_dir)
            write_output(markdown_content, output_path, parsed_args.rich)
        except HtmlMarkError as e:
            logger.debug("Conversion of %s failed", input_name, exc_info=True)
            print(f"Error: {input_name}: {e}", file=sys.stderr)
            exit_code = EXIT_ERROR
        except OSError as e:
            print(f"Error: {input_name}: {e}", file=sys.stderr)
            exit_code = EXIT_ERROR
        else:
            if output_path is not None:
                print(f"Converted {input_name} -> {output_path}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
