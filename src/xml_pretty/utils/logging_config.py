"""Logging setup for the ``xml-pretty`` process.

Library modules only ever call ``logging.getLogger(__name__)``; handlers
are installed once, here, by the CLI.  Records go to stderr through
Rich's handler when Rich is importable, else through a plain stream
handler, matching the console fallback.
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER: str = "xml_pretty"


def _build_handler() -> logging.Handler:
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(levelname)s %(name)s: %(message)s"),
        )
        return handler
    return RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Parameters
    ----------
    verbose:
        ``True`` logs at DEBUG, otherwise only warnings and above.

    Calling this more than once replaces the previous handler rather
    than stacking duplicates.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers = [_build_handler()]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
