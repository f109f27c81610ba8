"""
Tests for the HTML tree builder and node model.
"""

import pytest

from memoquill.exceptions import ParsingError
from memoquill.parser import html_parser
from memoquill.parser.html_parser import ROOT_TAG, parse_html
from memoquill.parser.nodes import Comment, Element, Text, serialize, serialize_children
from memoquill.parser.style_parser import parse_style
from memoquill.utils.enums import Alignment, Direction


class TestParseHtml:
    """Test cases for parse_html."""

    def test_root_is_synthetic_body(self):
        """Parsed nodes hang below a synthetic body element."""
        root = parse_html("<p>Hello</p>")

        assert root.tag == ROOT_TAG
        assert root.children == [Element("p", {}, [Text("Hello")])]

    def test_empty_and_none_input(self):
        """Empty input produces an empty root."""
        assert parse_html("").children == []
        assert parse_html(None).children == []

    def test_tags_and_attributes_lower_cased(self):
        """Tag and attribute names are normalized to lower case."""
        root = parse_html('<P DIR="rtl" Style="text-align:right">x</P>')

        paragraph = root.children[0]
        assert paragraph.tag == "p"
        assert paragraph.attributes == {"dir": "rtl", "style": "text-align:right"}

    def test_first_duplicate_attribute_wins(self):
        """A repeated attribute keeps its first value."""
        root = parse_html('<td colspan="2" colspan="3">x</td>')

        assert root.children[0].get("colspan") == "2"

    def test_void_elements_take_no_children(self):
        """<br> never opens a scope."""
        root = parse_html("<p>a<br>b</p>")

        assert root.children[0].children == [Text("a"), Element("br"), Text("b")]

    def test_self_closing_tags(self):
        """<br/> and <p/> both produce empty elements."""
        root = parse_html("<br/><p/>text")

        assert root.children == [Element("br"), Element("p"), Text("text")]

    def test_stray_end_tag_is_ignored(self):
        """An end tag without a matching open element is dropped."""
        root = parse_html("<p>a</b>b</p>")

        assert root.children == [Element("p", {}, [Text("ab")])]

    def test_unclosed_elements_close_at_end(self):
        """Elements left open are closed at end of input."""
        root = parse_html("<p><b>bold")

        assert root.children == [Element("p", {}, [Element("b", {}, [Text("bold")])])]

    def test_end_tag_closes_intermediate_elements(self):
        """Closing an outer element also closes the inner open ones."""
        root = parse_html("<p><b>x</p>y")

        assert root.children == [Element("p", {}, [Element("b", {}, [Text("x")])]), Text("y")]

    def test_omitted_end_tags_nest(self):
        """No implicit closing: a cell opened inside a cell becomes its child."""
        root = parse_html("<tr><td>1<td>2</tr>")

        assert root.children == [
            Element("tr", {}, [Element("td", {}, [Text("1"), Element("td", {}, [Text("2")])])])
        ]

    def test_entities_are_decoded(self):
        """Character references become plain characters."""
        root = parse_html("<p>&nbsp;&amp;&lt;</p>")

        assert root.children[0].text_content() == "\u00a0&<"

    def test_comments_are_kept(self):
        """Comments survive parsing; the sanitizer removes them."""
        root = parse_html("<!-- note --><p>x</p>")

        assert root.children[0] == Comment(" note ")

    def test_parser_failure_raises_parsing_error(self, monkeypatch):
        """Errors raised inside the parser surface as ParsingError."""
        def explode(self, data):
            raise ValueError("boom")

        monkeypatch.setattr(html_parser.TreeBuilder, "feed", explode)

        with pytest.raises(ParsingError) as exc_info:
            parse_html("<p>x</p>")
        assert "boom" in str(exc_info.value)


class TestNodes:
    """Test cases for the node model."""

    def test_text_content_concatenates_descendants(self):
        """text_content walks the whole subtree in order."""
        root = parse_html("<p>a<b>b<i>c</i></b>d</p>")

        assert root.text_content() == "abcd"

    def test_iter_elements_is_pre_order(self):
        """iter_elements yields parents before children."""
        root = parse_html("<div><p><b>x</b></p><ul><li>y</li></ul></div>")

        assert [el.tag for el in root.iter_elements()] == ["div", "p", "b", "ul", "li"]

    def test_element_children_skips_text(self):
        """Only element children are returned."""
        root = parse_html("<ul> <li>a</li> <li>b</li> </ul>")

        assert [el.tag for el in root.children[0].element_children()] == ["li", "li"]

    def test_serialize_escapes_text_and_attributes(self):
        """Serialized markup escapes special characters."""
        element = Element("td", {"title": 'a"b'}, [Text("1 < 2 & 3")])

        assert serialize(element) == '<td title="a&quot;b">1 &lt; 2 &amp; 3</td>'

    def test_serialize_void_element(self):
        """Void elements have no end tag."""
        assert serialize(Element("br")) == "<br>"

    def test_serialized_tree_parses_back(self):
        """serialize_children output parses to an equal tree."""
        root = parse_html('<p style="text-align: left">a<br><b>b &amp; c</b></p><ul><li>x</li></ul>')

        assert parse_html(serialize_children(root)) == root


class TestParseStyle:
    """Test cases for the inline style parser."""

    def test_parses_declarations(self):
        """Names are lower-cased and values trimmed."""
        style = parse_style(" Text-Align : Center ; direction: rtl ")

        assert style.declarations == {"text-align": "Center", "direction": "rtl"}
        assert style.text_align is Alignment.CENTER
        assert style.direction is Direction.RTL

    def test_last_declaration_wins(self):
        """A repeated property keeps its last value."""
        assert parse_style("text-align: left; text-align: right").text_align is Alignment.RIGHT

    def test_invalid_values_do_not_override(self):
        """The last valid value wins; invalid ones are ignored."""
        style = parse_style("text-align: right; text-align: bogus; direction: rtl; direction: up")

        assert style.text_align is Alignment.RIGHT
        assert style.direction is Direction.RTL
        assert style.declarations == {"text-align": "right", "direction": "rtl"}

    def test_malformed_parts_are_skipped(self):
        """Parts without a colon or a name are ignored."""
        style = parse_style("garbage; :x; color: red")

        assert style.declarations == {"color": "red"}

    def test_unknown_values_resolve_to_none(self):
        """Unsupported alignment/direction values are not reported."""
        style = parse_style("text-align: start; direction: sideways")

        assert style.text_align is None
        assert style.direction is None

    def test_empty_style(self):
        """None and empty strings give no declarations."""
        assert parse_style(None).declarations == {}
        assert parse_style("").text_align is None
