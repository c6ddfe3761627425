"""Domain models for xml-pretty.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and live for exactly one invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

DEFAULT_INDENT: int = 2
"""Spaces per nesting level when ``--indent`` is omitted."""

DEFAULT_MAX_LINE_LENGTH: int = 120
"""Target line width when ``-l`` is omitted."""

STDIN_DESCRIPTOR: str = "standard input"
STDOUT_DESCRIPTOR: str = "standard output"


# ---------------------------------------------------------------------------
# Raw command-line input
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InvocationArguments:
    """Flags exactly as the caller supplied them, before any defaulting."""

    input_path: Path | None = None
    output_path: Path | None = None
    replace: bool = False
    indent: int | None = None
    max_line_length: int | None = None
    hex_entities: bool = False
    no_text_indent: bool = False
    help: bool = False


# ---------------------------------------------------------------------------
# Formatting configuration
# ---------------------------------------------------------------------------

class EntityMode(str, Enum):
    """How reserved characters are written in the output."""

    STANDARD = "standard"
    """Named entities (``&amp;``, ``&lt;`` …) and decimal character references."""

    HEX = "hex"
    """Hexadecimal character references (``&#x26;``, ``&#x3C;`` …)."""


@dataclass(frozen=True, slots=True)
class FormatConfig:
    """Fully defaulted configuration handed to the pretty-printing engine."""

    indent: int = DEFAULT_INDENT
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    entity_mode: EntityMode = EntityMode.STANDARD
    indent_text_nodes: bool = True


# ---------------------------------------------------------------------------
# Input / output endpoints
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InputSource:
    """A named file, or standard input when ``path`` is ``None``."""

    path: Path | None = None

    @property
    def is_stdin(self) -> bool:
        return self.path is None

    def describe(self) -> str:
        return STDIN_DESCRIPTOR if self.path is None else str(self.path)


@dataclass(frozen=True, slots=True)
class OutputTarget:
    """A named file, or standard output when ``path`` is ``None``."""

    path: Path | None = None

    @property
    def is_stdout(self) -> bool:
        return self.path is None

    def describe(self) -> str:
        return STDOUT_DESCRIPTOR if self.path is None else str(self.path)


# ---------------------------------------------------------------------------
# Resolution outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ResolvedRequest:
    """The complete plan for one invocation."""

    source: InputSource
    target: OutputTarget
    config: FormatConfig = field(default_factory=FormatConfig)


@dataclass(frozen=True, slots=True)
class UsageDiagnostic:
    """Guidance for the user; the process still exits successfully."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class HelpRequested:
    """The caller asked for usage text instead of formatting."""


Resolution = ResolvedRequest | UsageDiagnostic | HelpRequested
"""Tagged result returned by :func:`~xml_pretty.core.resolver.resolve_request`."""
