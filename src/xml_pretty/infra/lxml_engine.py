"""lxml backed implementation of :class:`~xml_pretty.core.protocols.PrettyPrinter`.

This module is the **only** place in the codebase that imports ``lxml``.
lxml syntax errors are caught here and re-raised as
:class:`~xml_pretty.exceptions.DocumentParseError` — nothing raw escapes
the infrastructure boundary.

Layout rules
------------
* One element per line, ``indent`` spaces per nesting level.
* Empty elements collapse to ``<name/>``.
* A text-only element stays on one line when it fits; otherwise its
  text is reflowed onto indented lines between the tags.
* In mixed content every non-blank text run and child node gets its own
  line(s) one level deeper.
* A start tag wider than ``max_line_length`` with several attributes
  puts each attribute on its own line.
* Words are never split, so ``max_line_length`` is a target, not a cap.
* Content under ``xml:space="preserve"`` is written verbatim after the
  start tag.

Formatting an already formatted document with the same configuration
reproduces it byte for byte.
"""

from __future__ import annotations

import re
import textwrap
from dataclasses import dataclass
from typing import Any

from xml_pretty.core.models import EntityMode, FormatConfig
from xml_pretty.exceptions import DocumentParseError, EnvironmentError

XML_NAMESPACE: str = "http://www.w3.org/XML/1998/namespace"

_DECLARATION_RE = re.compile(rb"^(?:\xef\xbb\xbf)?\s*<\?xml\s([^?]*)\?>")
_PROLOG_MISC_RE = re.compile(rb"\s+|<\?.*?\?>|<!--.*?-->", re.DOTALL)
_DOCTYPE_TOKEN_RE = re.compile(
    rb"\"[^\"]*\"|'[^']*'|<!--.*?-->|<\?.*?\?>|[\[\]>]|[^\"'<\[\]>]+|<",
    re.DOTALL,
)
_XML_WHITESPACE = re.compile(r"[ \t\r\n]+")
_XML_WHITESPACE_CHARS = " \t\r\n"

_STANDARD_TEXT: dict[int, str] = {
    ord("&"): "&amp;",
    ord("<"): "&lt;",
    ord(">"): "&gt;",
}
_STANDARD_ATTRIBUTE: dict[int, str] = {
    **_STANDARD_TEXT,
    ord('"'): "&quot;",
    ord("\n"): "&#10;",
    ord("\r"): "&#13;",
    ord("\t"): "&#9;",
}
_HEX_TEXT: dict[int, str] = {ord(c): f"&#x{ord(c):X};" for c in "&<>"}
_HEX_ATTRIBUTE: dict[int, str] = {ord(c): f"&#x{ord(c):X};" for c in '&<>"\n\r\t'}


def _import_etree() -> Any:
    """Import ``lxml.etree`` lazily so ``--help`` works without lxml."""
    try:
        from lxml import etree
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "lxml is not installed. Install with: pip install lxml",
        ) from exc
    return etree


# ---------------------------------------------------------------------------
# Document model
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParsedDocument:
    """A parsed document plus the prolog details lxml does not re-emit."""

    root: Any
    """The root ``lxml.etree._Element``."""

    declaration: str | None
    """Normalized ``<?xml …?>`` line, or ``None`` if the source had none."""

    doctype: str | None
    """The source's ``<!DOCTYPE …>`` text, internal subset included, or ``None``."""


def _build_declaration(data: bytes, docinfo: Any) -> str | None:
    """Rebuild the XML declaration for UTF-8 output, if one was present."""
    match = _DECLARATION_RE.match(data)
    if match is None:
        return None
    parts = [f'version="{docinfo.xml_version or "1.0"}"']
    if b"encoding" in match.group(1):
        # Output is always written as UTF-8.
        parts.append('encoding="UTF-8"')
    if b"standalone" in match.group(1) and docinfo.standalone is not None:
        parts.append(f'standalone="{"yes" if docinfo.standalone else "no"}"')
    return f"<?xml {' '.join(parts)}?>"


def _extract_doctype(data: bytes, docinfo: Any) -> str | None:
    """Return the source's ``<!DOCTYPE …>`` text, internal subset included.

    lxml's ``docinfo.doctype`` drops the ``[ … ]`` subset, and with it the
    entity declarations that ``&name;`` references in the body rely on.
    Falls back to ``docinfo.doctype`` when the raw bytes cannot be scanned
    (e.g. UTF-16 input).
    """
    position = 3 if data.startswith(b"\xef\xbb\xbf") else 0
    match = _PROLOG_MISC_RE.match(data, position)
    while match is not None:
        position = match.end()
        match = _PROLOG_MISC_RE.match(data, position)
    if not data.startswith(b"<!DOCTYPE", position):
        return docinfo.doctype or None

    depth = 0
    for token in _DOCTYPE_TOKEN_RE.finditer(data, position):
        value = token.group()
        if value == b"[":
            depth += 1
        elif value == b"]":
            depth -= 1
        elif value == b">" and depth == 0:
            raw = data[position:token.end()]
            try:
                return raw.decode(docinfo.encoding or "utf-8", errors="replace")
            except LookupError:
                return raw.decode("utf-8", errors="replace")
    return docinfo.doctype or None


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class LxmlPrettyPrinter:
    """Concrete :class:`PrettyPrinter` backed by ``lxml.etree``.

    Usage::

        engine = LxmlPrettyPrinter()
        document = engine.parse(b"<a><b>x</b></a>", "a.xml")
        text = engine.render(document, FormatConfig())

    This class satisfies the :class:`~xml_pretty.core.protocols.PrettyPrinter`
    protocol structurally — no explicit inheritance required.
    """

    @staticmethod
    def _build_parser(etree: Any) -> Any:
        """Return a parser that keeps comments/PIs and never fetches anything."""
        return etree.XMLParser(
            resolve_entities=False,
            no_network=True,
            remove_comments=False,
            remove_pis=False,
        )

    def parse(self, data: bytes, source: str) -> ParsedDocument:
        """Parse *data* into a :class:`ParsedDocument`.

        Raises
        ------
        DocumentParseError
            When *data* is empty or not well-formed.
        """
        etree = _import_etree()

        if not data.strip():
            raise DocumentParseError(
                f"Failed to prettify '{source}'",
                source=source,
                hint="Document is empty.",
            )

        try:
            root = etree.fromstring(data, self._build_parser(etree))
        except etree.XMLSyntaxError as exc:
            raise DocumentParseError(
                f"Failed to prettify '{source}'",
                source=source,
                hint=str(exc),
            ) from exc

        docinfo = root.getroottree().docinfo
        return ParsedDocument(
            root=root,
            declaration=_build_declaration(data, docinfo),
            doctype=_extract_doctype(data, docinfo),
        )

    def render(self, document: ParsedDocument, config: FormatConfig) -> str:
        """Serialize *document* according to *config*."""
        return _Renderer(config, _import_etree()).render(document)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _has_text(text: str | None) -> bool:
    return bool(text) and bool(text.strip(_XML_WHITESPACE_CHARS))


def _normalize(text: str) -> str:
    """Collapse XML whitespace runs; non-breaking spaces are content."""
    return _XML_WHITESPACE.sub(" ", text).strip(" ")


class _Renderer:
    """Line-oriented serializer for one :class:`FormatConfig`."""

    def __init__(self, config: FormatConfig, etree: Any) -> None:
        self._config = config
        self._etree = etree
        if config.entity_mode is EntityMode.HEX:
            self._text_table = _HEX_TEXT
            self._attribute_table = _HEX_ATTRIBUTE
        else:
            self._text_table = _STANDARD_TEXT
            self._attribute_table = _STANDARD_ATTRIBUTE

    def render(self, document: ParsedDocument) -> str:
        lines: list[str] = []
        if document.declaration:
            lines.append(document.declaration)
        if document.doctype:
            lines.append(document.doctype)

        root = document.root
        for node in reversed(list(root.itersiblings(preceding=True))):
            lines.extend(self._node_lines(node, 0))
        lines.extend(self._node_lines(root, 0))
        for node in root.itersiblings():
            lines.extend(self._node_lines(node, 0))
        return "\n".join(lines)

    # -- helpers -------------------------------------------------------

    def _pad(self, depth: int) -> str:
        return " " * (self._config.indent * depth)

    def _escape_text(self, text: str) -> str:
        return text.translate(self._text_table)

    def _escape_attribute(self, value: str) -> str:
        return value.translate(self._attribute_table)

    def _wrap(self, escaped: str, depth: int) -> list[str]:
        pad = self._pad(depth)
        width = max(self._config.max_line_length - len(pad), 1)
        return [
            pad + line
            for line in textwrap.wrap(
                escaped,
                width=width,
                break_long_words=False,
                break_on_hyphens=False,
            )
        ]

    # -- names ---------------------------------------------------------

    def _element_name(self, node: Any) -> str:
        localname = self._etree.QName(node).localname
        return f"{node.prefix}:{localname}" if node.prefix else localname

    def _attribute_name(self, node: Any, key: str) -> str:
        if not key.startswith("{"):
            return key
        qname = self._etree.QName(key)
        if qname.namespace == XML_NAMESPACE:
            return f"xml:{qname.localname}"
        for prefix, uri in sorted(node.nsmap.items(), key=_prefix_order):
            if prefix is not None and uri == qname.namespace:
                return f"{prefix}:{qname.localname}"
        return qname.localname

    def _attributes(self, node: Any) -> list[str]:
        """Namespace declarations new at *node*, then attributes in source order."""
        parent = node.getparent()
        parent_nsmap = parent.nsmap if parent is not None else {}
        attributes: list[str] = []

        for prefix, uri in sorted(node.nsmap.items(), key=_prefix_order):
            if parent_nsmap.get(prefix) != uri:
                name = "xmlns" if prefix is None else f"xmlns:{prefix}"
                attributes.append(f'{name}="{self._escape_attribute(uri)}"')

        if (
            node.prefix is None
            and self._etree.QName(node).namespace is None
            and parent_nsmap.get(None)
        ):
            attributes.append('xmlns=""')

        for key, value in node.attrib.items():
            name = self._attribute_name(node, key)
            attributes.append(f'{name}="{self._escape_attribute(value)}"')
        return attributes

    # -- nodes ---------------------------------------------------------

    def _node_lines(self, node: Any, depth: int) -> list[str]:
        pad = self._pad(depth)
        if node.tag is self._etree.Comment:
            return [f"{pad}<!--{node.text or ''}-->"]
        if node.tag is self._etree.PI:
            body = f"{node.target} {node.text}" if node.text else node.target
            return [f"{pad}<?{body}?>"]
        if node.tag is self._etree.Entity:
            return [f"{pad}{node.text}"]
        return self._element_lines(node, depth)

    def _start_tag(
        self, pad: str, name: str, attributes: list[str], close: str,
    ) -> list[str]:
        single = f"{pad}<{name}{''.join(' ' + a for a in attributes)}{close}"
        if len(attributes) < 2 or len(single) <= self._config.max_line_length:
            return [single]
        inner = pad + self._pad(1)
        lines = [f"{pad}<{name}"]
        lines.extend(inner + attribute for attribute in attributes)
        lines[-1] += close
        return lines

    def _content(self, node: Any) -> list[Any]:
        """Non-blank text runs (``str``) and child nodes, in document order."""
        items: list[Any] = []
        if _has_text(node.text):
            items.append(node.text)
        for child in node:
            items.append(child)
            if _has_text(child.tail):
                items.append(child.tail)
        return items

    def _text_lines(self, text: str, depth: int) -> list[str]:
        if self._config.indent_text_nodes:
            return self._wrap(self._escape_text(_normalize(text)), depth)
        return [self._pad(depth) + self._escape_text(text.strip(_XML_WHITESPACE_CHARS))]

    def _inline(self, node: Any) -> str:
        """Serialize *node* and its descendants on one run, whitespace intact."""
        if node.tag is self._etree.Comment:
            return f"<!--{node.text or ''}-->"
        if node.tag is self._etree.PI:
            return f"<?{node.target} {node.text}?>" if node.text else f"<?{node.target}?>"
        if node.tag is self._etree.Entity:
            return node.text
        name = self._element_name(node)
        start = f"<{name}{''.join(' ' + a for a in self._attributes(node))}"
        if not node.text and len(node) == 0:
            return start + "/>"
        return f"{start}>{self._inline_content(node)}</{name}>"

    def _inline_content(self, node: Any) -> str:
        parts = [self._escape_text(node.text or "")]
        for child in node:
            parts.append(self._inline(child))
            parts.append(self._escape_text(child.tail or ""))
        return "".join(parts)

    def _element_lines(self, node: Any, depth: int) -> list[str]:
        pad = self._pad(depth)
        name = self._element_name(node)
        attributes = self._attributes(node)
        content = self._content(node)
        close = f"</{name}>"

        if (node.text or len(node)) and _preserves_space(node):
            lines = self._start_tag(pad, name, attributes, ">")
            lines[-1] += self._inline_content(node) + close
            return lines

        if not content:
            if node.text and not self._config.indent_text_nodes:
                lines = self._start_tag(pad, name, attributes, ">")
                lines[-1] += self._escape_text(node.text) + close
                return lines
            return self._start_tag(pad, name, attributes, "/>")

        lines = self._start_tag(pad, name, attributes, ">")

        if len(node) == 0:
            text = content[0]
            if not self._config.indent_text_nodes:
                lines[-1] += self._escape_text(text) + close
                return lines
            escaped = self._escape_text(_normalize(text))
            if (
                len(lines) == 1
                and len(lines[0]) + len(escaped) + len(close)
                <= self._config.max_line_length
            ):
                return [lines[0] + escaped + close]
            lines.extend(self._wrap(escaped, depth + 1))
            lines.append(pad + close)
            return lines

        for item in content:
            if isinstance(item, str):
                lines.extend(self._text_lines(item, depth + 1))
            else:
                lines.extend(self._node_lines(item, depth + 1))
        lines.append(pad + close)
        return lines


def _preserves_space(node: Any) -> bool:
    """True when the nearest ``xml:space`` on *node* or an ancestor is ``preserve``."""
    key = f"{{{XML_NAMESPACE}}}space"
    value = node.get(key)
    for ancestor in node.iterancestors():
        if value is not None:
            break
        value = ancestor.get(key)
    return value == "preserve"


def _prefix_order(item: tuple[str | None, str]) -> tuple[bool, str]:
    """Sort key placing the default namespace first."""
    prefix = item[0]
    return (prefix is not None, prefix or "")
