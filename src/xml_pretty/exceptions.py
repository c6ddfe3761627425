"""Custom exception hierarchy for xml-pretty.

All exceptions that cross layer boundaries must inherit from
:class:`XmlPrettyError`.  Raw third-party exceptions (e.g. from lxml)
and ``OSError`` must NEVER propagate beyond the infrastructure layer —
they must be caught and re-raised as a typed subclass defined here.

Usage guidance (no document on an interactive terminal, replace on
standard input) is *not* an exception: the request resolver returns it
as a :class:`~xml_pretty.core.models.UsageDiagnostic` value.

Hierarchy
---------
XmlPrettyError
├── InvalidArgumentError
├── FileAccessError
├── DocumentParseError
└── EnvironmentError
"""

from __future__ import annotations

from pathlib import Path


class XmlPrettyError(Exception):
    """Base exception for all xml-pretty errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional underlying reason or guidance shown below the message."""


# --- Arguments -------------------------------------------------------------

class InvalidArgumentError(XmlPrettyError):
    """Raised when an option value is outside its legal range."""


# --- I/O -------------------------------------------------------------------

class FileAccessError(XmlPrettyError):
    """Raised when a named input or output file cannot be read or written."""

    def __init__(
        self, message: str, *, path: Path, hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.path: Path = path


# --- Parsing ---------------------------------------------------------------

class DocumentParseError(XmlPrettyError):
    """Raised when the input is not a well-formed XML document."""

    def __init__(
        self, message: str, *, source: str, hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.source: str = source
        """Descriptor of the input: a file path or ``"standard input"``."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(XmlPrettyError):
    """Raised when a required runtime dependency is not available."""
