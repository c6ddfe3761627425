"""CLI application entry point and command routing for xml-pretty.

This module is the **sole error boundary** for the entire application.
It catches :class:`~xml_pretty.exceptions.XmlPrettyError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages on stderr and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — resolution is delegated to
  :mod:`xml_pretty.core.resolver` and execution to
  :class:`~xml_pretty.core.format_service.FormatService`.
* Standard output carries only the formatted document or help text.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from xml_pretty.cli import exit_codes
from xml_pretty.cli.console import console
from xml_pretty.core.models import (
    HelpRequested,
    InvocationArguments,
    ResolvedRequest,
    UsageDiagnostic,
)
from xml_pretty.core.resolver import resolve_request
from xml_pretty.exceptions import XmlPrettyError
from xml_pretty.infra.terminal import stdin_is_interactive
from xml_pretty.utils.logging_config import setup_logging
from xml_pretty.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    ``--help`` is a plain flag rather than argparse's built-in action so
    that it flows through :func:`resolve_request` like every other input.
    """
    parser = argparse.ArgumentParser(
        prog="xml-pretty",
        description=(
            "Reformat an XML document with consistent indentation, "
            "line wrapping, and entity encoding."
        ),
        add_help=False,
    )
    parser.add_argument(
        "-h",
        "--help",
        action="store_true",
        help="display help information",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "xml_document_path",
        nargs="?",
        type=Path,
        default=None,
        metavar="XML_DOCUMENT_PATH",
        help="path to XML document; standard input is read when omitted",
    )
    parser.add_argument(
        "--output-path",
        type=Path,
        default=None,
        metavar="PATH",
        help="output to file instead of standard output",
    )
    parser.add_argument(
        "-r",
        "--replace",
        action="store_true",
        help="replace input file with output",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        metavar="N",
        help="number of spaces to indent (default: 2)",
    )
    parser.add_argument(
        "-l",
        "--max-line-length",
        type=int,
        default=None,
        metavar="N",
        help="max line length (default: 120)",
    )
    parser.add_argument(
        "-H",
        "--hex-entities",
        action="store_true",
        help="use hex entity encoding (e.g. &#xNNNN;) for all entities",
    )
    parser.add_argument(
        "--no-text-indent",
        action="store_true",
        help="do not prettify and indent text nodes",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log resolution and I/O details to standard error",
    )
    return parser


def _to_invocation(namespace: argparse.Namespace) -> InvocationArguments:
    return InvocationArguments(
        input_path=namespace.xml_document_path,
        output_path=namespace.output_path,
        replace=namespace.replace,
        indent=namespace.indent,
        max_line_length=namespace.max_line_length,
        hex_entities=namespace.hex_entities,
        no_text_indent=namespace.no_text_indent,
        help=namespace.help,
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_format(request: ResolvedRequest) -> int:
    """Run the formatting pipeline for a resolved request."""
    from xml_pretty.core.format_service import FormatService
    from xml_pretty.infra.file_store import FileDocumentStore
    from xml_pretty.infra.lxml_engine import LxmlPrettyPrinter

    service = FormatService(LxmlPrettyPrinter(), FileDocumentStore())
    service.run(request)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the xml-pretty CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.  Usage diagnostics exit with
        :data:`exit_codes.SUCCESS`.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    resolution = resolve_request(
        _to_invocation(args),
        stdin_is_interactive=stdin_is_interactive,
    )

    if isinstance(resolution, HelpRequested):
        parser.print_help()
        return exit_codes.SUCCESS

    if isinstance(resolution, UsageDiagnostic):
        console.error("ERROR", resolution.message, resolution.hint)
        return exit_codes.SUCCESS

    return _handle_format(resolution)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except XmlPrettyError as exc:
        console.error("Error", str(exc), exc.hint)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
