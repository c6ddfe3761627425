"""Core format service — runs a resolved request end to end.

This service delegates reading and writing to a
:class:`~xml_pretty.core.protocols.DocumentStore` and the XML work to a
:class:`~xml_pretty.core.protocols.PrettyPrinter`, both injected at
construction time.  It is responsible for:

* Sequencing read → parse → render → commit.
* Ensuring only :class:`~xml_pretty.exceptions.XmlPrettyError` subclasses
  escape.

Guarantees
----------
* Pure orchestration — no direct filesystem or stream access.
* No lxml import.
* Nothing is written unless rendering succeeded.
"""

from __future__ import annotations

import logging

from xml_pretty.core.models import ResolvedRequest
from xml_pretty.core.protocols import DocumentStore, PrettyPrinter
from xml_pretty.exceptions import DocumentParseError, XmlPrettyError

logger = logging.getLogger(__name__)


class FormatService:
    """Stateless service that executes a :class:`ResolvedRequest`.

    Parameters
    ----------
    engine:
        Any object satisfying the :class:`PrettyPrinter` protocol.
    store:
        Any object satisfying the :class:`DocumentStore` protocol.
    """

    def __init__(self, engine: PrettyPrinter, store: DocumentStore) -> None:
        self._engine: PrettyPrinter = engine
        self._store: DocumentStore = store

    def format(self, request: ResolvedRequest) -> str:
        """Read and pretty-print the request's input, returning the text.

        Raises
        ------
        FileAccessError
            When the input file cannot be read.
        DocumentParseError
            When the input is not well-formed XML.
        """
        source = request.source.describe()
        data = self._store.read(request.source)
        logger.debug("Read %d bytes from %s", len(data), source)

        try:
            document = self._engine.parse(data, source)
        except XmlPrettyError:
            # Already one of ours — propagate unchanged.
            raise
        except Exception as exc:
            raise DocumentParseError(
                f"Failed to prettify '{source}'",
                source=source,
                hint=str(exc),
            ) from exc

        return self._engine.render(document, request.config)

    def run(self, request: ResolvedRequest) -> None:
        """Format the request's input and commit it to the request's target."""
        text = self.format(request)
        self._store.commit(request.target, text)
        logger.debug(
            "Wrote %d characters to %s", len(text), request.target.describe(),
        )
