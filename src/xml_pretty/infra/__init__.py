"""Infrastructure layer — external system integration.

This layer wraps all interaction with lxml, the filesystem, and the
process's standard streams.  Every raw third-party exception and every
``OSError`` must be caught here and re-raised as a
:class:`~xml_pretty.exceptions.XmlPrettyError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no Rich rendering); the only stdout write is
  the formatted document itself.
* Must expose clean, typed interfaces consumed by the core layer.
"""

from xml_pretty.infra.file_store import FileDocumentStore
from xml_pretty.infra.lxml_engine import LxmlPrettyPrinter, ParsedDocument
from xml_pretty.infra.terminal import stdin_is_interactive

__all__: list[str] = [
    "FileDocumentStore",
    "LxmlPrettyPrinter",
    "ParsedDocument",
    "stdin_is_interactive",
]
