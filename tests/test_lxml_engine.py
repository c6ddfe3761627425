"""Tests for the lxml pretty-printing engine (infra/lxml_engine.py).

These run the real lxml parser; no filesystem access.

Coverage:
* Indentation at default, custom, and zero widths.
* Text reflow, best-effort wrapping, and ``--no-text-indent``.
* ``xml:space="preserve"`` content written verbatim.
* Attribute wrapping for wide start tags.
* Entity encoding modes and their re-parse equivalence.
* Prolog (DOCTYPE internal subsets included), comments, processing
  instructions, and namespaces.
* Idempotence across configurations.
* Parse errors tagged with their source.
"""

from __future__ import annotations

import pytest
from lxml import etree

from xml_pretty.core.models import EntityMode, FormatConfig
from xml_pretty.exceptions import DocumentParseError
from xml_pretty.infra.lxml_engine import LxmlPrettyPrinter, ParsedDocument


def _pretty(data: str | bytes, **config: object) -> str:
    engine = LxmlPrettyPrinter()
    raw = data.encode("utf-8") if isinstance(data, str) else data
    document = engine.parse(raw, "test.xml")
    return engine.render(document, FormatConfig(**config))  # type: ignore[arg-type]


def _canonical(text: str) -> bytes:
    return etree.tostring(etree.fromstring(text.encode("utf-8")), method="c14n")


SAMPLE = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    "<!-- catalogue -->"
    '<catalog xmlns="urn:books" xmlns:x="urn:extra" xml:lang="en">'
    '<book id="b1" x:rating="5" title="Tom &amp; Jerry &lt;3">'
    "<title>The Quick Brown Fox</title>"
    "<summary>A fox  jumps\n over the lazy dog, again and again and again, "
    "until the dog finally wakes up and chases it away.</summary>"
    "<!--note-->"
    "<?render fast?>"
    "<p>Mixed <em>inline</em> content &amp; more</p>"
    "<empty/>"
    "</book>"
    "</catalog>"
)


# ---------------------------------------------------------------------------
# Indentation
# ---------------------------------------------------------------------------

class TestIndentation:
    def test_default_scenario(self) -> None:
        assert _pretty("<a><b>x</b></a>") == "<a>\n  <b>x</b>\n</a>"

    def test_indent_four(self) -> None:
        assert _pretty("<a><b><c>x</c></b></a>", indent=4) == (
            "<a>\n    <b>\n        <c>x</c>\n    </b>\n</a>"
        )

    def test_indent_zero_has_no_leading_whitespace(self) -> None:
        text = _pretty(SAMPLE, indent=0)
        lines = text.split("\n")
        assert all(line == line.lstrip() for line in lines)
        assert "<title>The Quick Brown Fox</title>" in lines
        assert "<empty/>" in lines

    def test_self_closing_element(self) -> None:
        assert _pretty("<a/>") == "<a/>"

    def test_empty_element_with_whitespace_collapses(self) -> None:
        assert _pretty("<a>\n   \n</a>") == "<a/>"

    def test_existing_whitespace_is_replaced(self) -> None:
        assert _pretty("<a>\n\t\t<b>x</b>   </a>") == "<a>\n  <b>x</b>\n</a>"


# ---------------------------------------------------------------------------
# Text handling
# ---------------------------------------------------------------------------

class TestText:
    def test_long_text_is_reflowed(self) -> None:
        words = " ".join(["word"] * 30)
        lines = _pretty(f"<p>{words}</p>", max_line_length=40).split("\n")
        assert lines[0] == "<p>"
        assert lines[-1] == "</p>"
        assert all(len(line) <= 40 for line in lines)
        assert all(line.startswith("  word") for line in lines[1:-1])
        assert " ".join(line.strip() for line in lines[1:-1]) == words

    def test_unbreakable_word_is_kept_whole(self) -> None:
        long_word = "x" * 50
        assert _pretty(f"<p>{long_word}</p>", max_line_length=20) == (
            f"<p>\n  {long_word}\n</p>"
        )

    def test_internal_whitespace_is_normalized(self) -> None:
        assert _pretty("<p>  one \n  two\tthree </p>") == "<p>one two three</p>"

    def test_non_breaking_space_is_content(self) -> None:
        assert _pretty("<p>a\u00a0\u00a0b</p>") == "<p>a\u00a0\u00a0b</p>"

    def test_mixed_content_one_unit_per_line(self) -> None:
        assert _pretty("<p>Hello <b>world</b>!</p>") == (
            "<p>\n  Hello\n  <b>world</b>\n  !\n</p>"
        )

    def test_no_text_indent_keeps_text_only_content(self) -> None:
        assert _pretty("<p>  keep   this  </p>", indent_text_nodes=False) == (
            "<p>  keep   this  </p>"
        )

    def test_no_text_indent_never_wraps(self) -> None:
        words = " ".join(["word"] * 30)
        assert _pretty(
            f"<p>{words}</p>", max_line_length=20, indent_text_nodes=False,
        ) == f"<p>{words}</p>"

    def test_no_text_indent_mixed_content(self) -> None:
        assert _pretty(
            "<a>hello   world<b/></a>", indent_text_nodes=False,
        ) == "<a>\n  hello   world\n  <b/>\n</a>"

    def test_no_text_indent_keeps_whitespace_only_text(self) -> None:
        assert _pretty("<a>   </a>", indent_text_nodes=False) == "<a>   </a>"
        assert _pretty("<a>   </a>") == "<a/>"

    def test_preserved_space_is_written_verbatim(self) -> None:
        text = _pretty('<r><pre xml:space="preserve">  a\n   b  </pre></r>')
        assert text == '<r>\n  <pre xml:space="preserve">  a\n   b  </pre>\n</r>'
        assert _pretty(text) == text

    def test_preserved_space_is_inherited(self) -> None:
        source = (
            '<r xml:space="preserve"><p> x <b>bold</b>\n<i/> <!--c--></p></r>'
        )
        assert _pretty(source) == source
        assert _pretty(source, max_line_length=5) == source

    def test_default_space_is_normalized(self) -> None:
        assert _pretty(
            '<r><pre xml:space="preserve"> a </pre><p xml:space="default">  x  </p></r>'
        ) == '<r>\n  <pre xml:space="preserve"> a </pre>\n  <p xml:space="default">x</p>\n</r>'

    def test_unicode_passes_through(self) -> None:
        assert _pretty("<a>café ☕</a>") == "<a>café ☕</a>"


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------

class TestAttributes:
    def test_attributes_keep_source_order(self) -> None:
        assert _pretty('<e z="1" a="2"/>') == '<e z="1" a="2"/>'

    def test_wide_start_tag_wraps_attributes(self) -> None:
        assert _pretty(
            '<e alpha="1" beta="2" gamma="3"/>', max_line_length=20,
        ) == '<e\n  alpha="1"\n  beta="2"\n  gamma="3"/>'

    def test_wrapped_start_tag_with_text(self) -> None:
        assert _pretty(
            '<e alpha="1" beta="2">hi</e>', max_line_length=15,
        ) == '<e\n  alpha="1"\n  beta="2">\n  hi\n</e>'

    def test_single_attribute_never_wraps(self) -> None:
        value = "v" * 40
        assert _pretty(f'<e name="{value}"/>', max_line_length=10) == (
            f'<e name="{value}"/>'
        )

    def test_attribute_whitespace_is_encoded(self) -> None:
        assert _pretty('<e v="a&#10;b&#9;c"/>') == '<e v="a&#10;b&#9;c"/>'


# ---------------------------------------------------------------------------
# Entity encoding
# ---------------------------------------------------------------------------

class TestEntityModes:
    SOURCE = '<a t="x&amp;&quot;y">1 &lt; 2 &amp; 3 &gt; 0</a>'

    def test_standard_mode(self) -> None:
        assert _pretty(self.SOURCE) == (
            '<a t="x&amp;&quot;y">1 &lt; 2 &amp; 3 &gt; 0</a>'
        )

    def test_hex_mode(self) -> None:
        assert _pretty(self.SOURCE, entity_mode=EntityMode.HEX) == (
            '<a t="x&#x26;&#x22;y">1 &#x3C; 2 &#x26; 3 &#x3E; 0</a>'
        )

    def test_hex_mode_attribute_newline(self) -> None:
        assert _pretty('<e v="a&#10;b"/>', entity_mode=EntityMode.HEX) == (
            '<e v="a&#xA;b"/>'
        )

    def test_modes_reparse_to_same_document(self) -> None:
        standard = _pretty(SAMPLE)
        hexadecimal = _pretty(SAMPLE, entity_mode=EntityMode.HEX)
        assert standard != hexadecimal
        assert _canonical(standard) == _canonical(hexadecimal)


# ---------------------------------------------------------------------------
# Prolog, comments, processing instructions
# ---------------------------------------------------------------------------

class TestProlog:
    def test_declaration_is_normalized_to_utf8(self) -> None:
        text = _pretty(
            b'<?xml version="1.0" encoding="ISO-8859-1"?>\n<!-- top --><r/>'
        )
        assert text == '<?xml version="1.0" encoding="UTF-8"?>\n<!-- top -->\n<r/>'

    def test_declaration_without_encoding(self) -> None:
        assert _pretty('<?xml version="1.0"?><r/>') == '<?xml version="1.0"?>\n<r/>'

    def test_standalone_is_kept(self) -> None:
        assert _pretty(
            '<?xml version="1.0" standalone="yes"?><r/>'
        ) == '<?xml version="1.0" standalone="yes"?>\n<r/>'

    def test_no_declaration_added(self) -> None:
        assert not _pretty("<r/>").startswith("<?xml")

    def test_doctype_is_kept(self) -> None:
        text = _pretty('<!DOCTYPE note SYSTEM "note.dtd"><note/>')
        assert text == '<!DOCTYPE note SYSTEM "note.dtd">\n<note/>'

    def test_internal_subset_keeps_entities_resolvable(self) -> None:
        source = b'<!DOCTYPE r [<!ENTITY foo "bar">]><r>x &foo; y</r>'
        text = _pretty(source)
        assert text == '<!DOCTYPE r [<!ENTITY foo "bar">]>\n<r>\n  x\n  &foo;\n  y\n</r>'
        assert "bar" in "".join(etree.fromstring(text.encode("utf-8")).itertext())
        assert _pretty(text) == text

    def test_internal_subset_with_markup_in_literals(self) -> None:
        source = (
            '<?xml version="1.0"?>\n'
            "<!DOCTYPE r [\n"
            '  <!ENTITY gt2 "a > b ] c">\n'
            "  <!-- ] > -->\n"
            "  <!ELEMENT r (#PCDATA)>\n"
            "]>\n<r>&gt2;</r>"
        )
        text = _pretty(source)
        assert text.split("\n")[1:7] == [
            "<!DOCTYPE r [",
            '  <!ENTITY gt2 "a > b ] c">',
            "  <!-- ] > -->",
            "  <!ELEMENT r (#PCDATA)>",
            "]>",
            "<r>",
        ]
        etree.fromstring(text.encode("utf-8"))

    def test_comments_and_pis_inside_elements(self) -> None:
        assert _pretty("<r><!--c--><?pi data?><x/></r>") == (
            "<r>\n  <!--c-->\n  <?pi data?>\n  <x/>\n</r>"
        )

    def test_trailing_top_level_comment(self) -> None:
        assert _pretty("<r/><!--end-->") == "<r/>\n<!--end-->"


# ---------------------------------------------------------------------------
# Namespaces
# ---------------------------------------------------------------------------

class TestNamespaces:
    def test_declarations_and_prefixes(self) -> None:
        assert _pretty(
            '<r xmlns="urn:a" xmlns:p="urn:p"><p:c p:x="1"/><d/></r>'
        ) == '<r xmlns="urn:a" xmlns:p="urn:p">\n  <p:c p:x="1"/>\n  <d/>\n</r>'

    def test_nested_declaration(self) -> None:
        assert _pretty('<r><q:c xmlns:q="urn:q"/></r>') == (
            '<r>\n  <q:c xmlns:q="urn:q"/>\n</r>'
        )

    def test_xml_prefix(self) -> None:
        assert _pretty('<r xml:lang="en"/>') == '<r xml:lang="en"/>'

    def test_namespaces_survive_reparse(self) -> None:
        assert _canonical(_pretty(SAMPLE)) == _canonical(_pretty(_pretty(SAMPLE)))


# ---------------------------------------------------------------------------
# Idempotence
# ---------------------------------------------------------------------------

class TestIdempotence:
    @pytest.mark.parametrize(
        "config",
        [
            {},
            {"indent": 0},
            {"indent": 4, "max_line_length": 30},
            {"max_line_length": 1},
            {"entity_mode": EntityMode.HEX},
            {"indent_text_nodes": False, "max_line_length": 40},
        ],
    )
    def test_formatting_twice_is_stable(self, config: dict[str, object]) -> None:
        once = _pretty(SAMPLE, **config)
        assert _pretty(once, **config) == once


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------

class TestParseErrors:
    def test_malformed_document(self) -> None:
        engine = LxmlPrettyPrinter()
        with pytest.raises(DocumentParseError) as exc_info:
            engine.parse(b"<a><b></a>", "broken.xml")
        assert exc_info.value.source == "broken.xml"
        assert "broken.xml" in str(exc_info.value)
        assert exc_info.value.hint

    def test_empty_document(self) -> None:
        engine = LxmlPrettyPrinter()
        with pytest.raises(DocumentParseError) as exc_info:
            engine.parse(b"  \n", "standard input")
        assert exc_info.value.source == "standard input"
        assert exc_info.value.hint == "Document is empty."

    def test_parse_returns_document(self) -> None:
        document = LxmlPrettyPrinter().parse(b"<a/>", "a.xml")
        assert isinstance(document, ParsedDocument)
        assert document.declaration is None
        assert document.doctype is None
