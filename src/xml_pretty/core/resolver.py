"""Request resolution — command-line arguments to a concrete plan.

:func:`resolve_request` is a pure function: the single environmental
question it needs answered ("is standard input an interactive
terminal?") is supplied by the caller as a zero-argument callable so
tests can substitute it.

Guarantees
----------
* Defaults for indent and line length are applied here and nowhere else.
* The terminal probe is consulted only when no input path was given.
* Replace-in-place never resolves to standard input.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from xml_pretty.core.models import (
    DEFAULT_INDENT,
    DEFAULT_MAX_LINE_LENGTH,
    EntityMode,
    FormatConfig,
    HelpRequested,
    InputSource,
    InvocationArguments,
    OutputTarget,
    Resolution,
    ResolvedRequest,
    UsageDiagnostic,
)
from xml_pretty.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

NO_DOCUMENT_MESSAGE: str = "No XML document provided."
CANNOT_REPLACE_STDIN_MESSAGE: str = (
    "Cannot replace input when reading from standard input."
)
USAGE_HINT: str = "Run with -h for usage information."


def build_config(arguments: InvocationArguments) -> FormatConfig:
    """Assemble the :class:`FormatConfig`, applying defaults once.

    Raises
    ------
    InvalidArgumentError
        When the indent is negative or the line length is not positive.
    """
    indent = DEFAULT_INDENT if arguments.indent is None else arguments.indent
    max_line_length = (
        DEFAULT_MAX_LINE_LENGTH
        if arguments.max_line_length is None
        else arguments.max_line_length
    )

    if indent < 0:
        raise InvalidArgumentError(
            f"Invalid indent: {indent}",
            hint="--indent must be zero or a positive number of spaces.",
        )
    if max_line_length < 1:
        raise InvalidArgumentError(
            f"Invalid max line length: {max_line_length}",
            hint="-l must be a positive number of characters.",
        )

    return FormatConfig(
        indent=indent,
        max_line_length=max_line_length,
        entity_mode=EntityMode.HEX if arguments.hex_entities else EntityMode.STANDARD,
        indent_text_nodes=not arguments.no_text_indent,
    )


def resolve_request(
    arguments: InvocationArguments,
    *,
    stdin_is_interactive: Callable[[], bool],
) -> Resolution:
    """Map *arguments* to a :class:`ResolvedRequest` or a diagnostic.

    Returns
    -------
    HelpRequested
        When the help flag is set; nothing else is examined.
    UsageDiagnostic
        When no document is available, or replace-in-place was requested
        while reading standard input.
    ResolvedRequest
        Otherwise.

    Raises
    ------
    InvalidArgumentError
        Propagated from :func:`build_config`.
    """
    if arguments.help:
        return HelpRequested()

    # Input selection
    if arguments.input_path is not None:
        source = InputSource(arguments.input_path)
    elif stdin_is_interactive():
        logger.debug("No input path and standard input is a terminal")
        return UsageDiagnostic(NO_DOCUMENT_MESSAGE, hint=USAGE_HINT)
    else:
        source = InputSource()

    # Output selection
    if arguments.replace:
        if source.is_stdin:
            return UsageDiagnostic(CANNOT_REPLACE_STDIN_MESSAGE, hint=USAGE_HINT)
        target = OutputTarget(source.path)
    elif arguments.output_path is not None:
        target = OutputTarget(arguments.output_path)
    else:
        target = OutputTarget()

    config = build_config(arguments)
    logger.debug(
        "Resolved request: input=%s output=%s config=%s",
        source.describe(),
        target.describe(),
        config,
    )
    return ResolvedRequest(source=source, target=target, config=config)
