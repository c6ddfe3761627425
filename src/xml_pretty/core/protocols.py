"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Any, Protocol

from xml_pretty.core.models import FormatConfig, InputSource, OutputTarget


class PrettyPrinter(Protocol):
    """Contract for the XML document engine.

    Any object that implements :meth:`parse` and :meth:`render` with the
    correct signatures satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def parse(self, data: bytes, source: str) -> Any:
        """Build an engine-specific document model from raw bytes.

        Parameters
        ----------
        data:
            The complete serialized document.
        source:
            Human-readable descriptor of where *data* came from, attached
            to any error raised.

        Raises
        ------
        DocumentParseError
            When *data* is not a well-formed XML document.
        """
        ...  # pragma: no cover

    def render(self, document: Any, config: FormatConfig) -> str:
        """Serialize *document* as pretty-printed text.

        Must not fail for any document returned by :meth:`parse`.
        """
        ...  # pragma: no cover


class DocumentStore(Protocol):
    """Contract for acquiring input bytes and committing output text.

    Implementations must map ``OSError`` to
    :class:`~xml_pretty.exceptions.FileAccessError` tagged with the path.
    """

    def read(self, source: InputSource) -> bytes:
        """Return the full contents of *source*."""
        ...  # pragma: no cover

    def commit(self, target: OutputTarget, text: str) -> None:
        """Deliver *text* to *target*."""
        ...  # pragma: no cover
