"""Filesystem and standard-stream implementation of
:class:`~xml_pretty.core.protocols.DocumentStore`.

Every ``OSError`` is caught here and re-raised as
:class:`~xml_pretty.exceptions.FileAccessError` tagged with the path —
nothing raw escapes the infrastructure boundary.

Rules
-----
* Streams are looked up on :mod:`sys` at call time, never cached.
* Named files are written with a single call; no temp-file swap.
"""

from __future__ import annotations

import sys

from xml_pretty.core.models import InputSource, OutputTarget
from xml_pretty.exceptions import FileAccessError

ENCODING: str = "utf-8"


class FileDocumentStore:
    """Concrete :class:`DocumentStore` over local files and stdio."""

    def read(self, source: InputSource) -> bytes:
        """Return the raw bytes of *source*.

        Standard input is read to completion in binary mode so the
        parser can honour the document's own encoding declaration.

        Raises
        ------
        FileAccessError
            When a named file cannot be opened or read.
        """
        if source.path is None:
            return sys.stdin.buffer.read()

        try:
            with source.path.open("rb") as handle:
                return handle.read()
        except OSError as exc:
            raise FileAccessError(
                f"Failed to read '{source.path}'",
                path=source.path,
                hint=exc.strerror or str(exc),
            ) from exc

    def commit(self, target: OutputTarget, text: str) -> None:
        """Write *text* to *target*.

        Standard output receives the text plus a trailing newline; a
        named file receives the text exactly. Both are UTF-8, matching
        the declaration the engine writes, whatever the locale says.

        Raises
        ------
        FileAccessError
            When a named file cannot be written.
        """
        if target.path is None:
            sys.stdout.flush()
            sys.stdout.buffer.write((text + "\n").encode(ENCODING))
            sys.stdout.buffer.flush()
            return

        try:
            target.path.write_text(text, encoding=ENCODING)
        except OSError as exc:
            raise FileAccessError(
                f"Failed to write to '{target.path}'",
                path=target.path,
                hint=exc.strerror or str(exc),
            ) from exc
