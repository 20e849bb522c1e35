import pytest

from litconf.exceptions import DocumentParseError
from litconf.nodes import Node, NodeKind
from litconf.parser import DocumentParser


@pytest.fixture
def parser() -> DocumentParser:
    return DocumentParser()


def kinds(nodes: tuple[Node, ...]) -> list[NodeKind]:
    return [node.kind for node in nodes]


def test_headings_build_nested_sections(parser: DocumentParser) -> None:
    html = (
        "<p><code>preamble</code></p>"
        "<h1>Top</h1><p><code>a</code></p>"
        "<h2 bind='inner'>Inner</h2><p><code>b</code></p>"
        "<h3>Deep</h3>"
        "<h2>Sibling</h2>"
        "<h1>Second</h1>"
    )

    document = parser.parse_html(html)
    sections = list(document.sections())

    assert [section.text for section in sections] == ["Top", "Inner", "Deep", "Sibling", "Second"]
    assert kinds(document.root.children) == [NodeKind.PARAGRAPH, NodeKind.SECTION, NodeKind.SECTION]
    top = document.root.children[1]
    assert kinds(top.children) == [NodeKind.PARAGRAPH, NodeKind.SECTION, NodeKind.SECTION]
    assert [child.text for child in top.children[1:]] == ["Inner", "Sibling"]
    assert sections[1].get("bind") == "inner"
    assert sections[1].name == "h2"


def test_section_content_skips_subsections(parser: DocumentParser) -> None:
    document = parser.parse_html("<h1>Top</h1><h2>Child</h2><p><code>x</code></p>")
    top = next(document.sections())

    assert top.content == ()
    assert kinds(top.children) == [NodeKind.SECTION]


def test_code_spans_and_verbatim(parser: DocumentParser) -> None:
    document = parser.parse_html(
        "<p><code>plain text</code> and <code>#!py 42 rest</code>"
        " and <code class='language-python highlight'>x</code></p>"
    )
    paragraph = document.root.children[0]

    assert kinds(paragraph.children) == [
        NodeKind.VERBATIM,
        NodeKind.TEXT,
        NodeKind.CODE_SPAN,
        NodeKind.TEXT,
        NodeKind.CODE_SPAN,
    ]
    assert paragraph.children[0].text == "plain text"
    assert paragraph.children[2].language == "py"
    assert paragraph.children[2].text == "42 rest"
    assert paragraph.children[4].language == "python"


def test_code_blocks_report_their_language(parser: DocumentParser) -> None:
    document = parser.parse_html(
        '<pre class="highlight"><code class="language-python">1 + 2\n</code></pre>'
        '<div class="highlight"><pre><span></span><code>x = 1\n</code></pre></div>'
        "<pre><code>no language\n</code></pre>"
    )
    first, second, third = document.root.children

    assert first.kind is NodeKind.CODE_BLOCK
    assert first.language == "python"
    assert first.text == "1 + 2\n"
    assert second.kind is NodeKind.CODE_BLOCK
    assert second.text == "x = 1\n"
    assert third.language is None


def test_wrapper_classes_provide_language(parser: DocumentParser) -> None:
    document = parser.parse_html(
        '<div class="language-ruby highlight"><pre><code>puts 1</code></pre></div>'
    )

    assert document.root.children[0].language == "ruby"


def test_property_block_is_an_attribute_container(parser: DocumentParser) -> None:
    html = (
        "<h2>Font</h2>"
        '<pre class="highlight"><code class="language-properties">bind: default_font\n'
        "owner: me\n</code></pre>"
        "<p><code>Iosevka</code></p>"
    )

    section = next(parser.parse_html(html).sections())

    assert kinds(section.children) == [NodeKind.ATTRIBUTES, NodeKind.PARAGRAPH]
    assert section.get("bind") == "default_font"
    assert section.get("owner") == "me"
    assert kinds(section.content) == [NodeKind.PARAGRAPH]


def test_custom_attributes_language() -> None:
    parser = DocumentParser(attributes_language="meta")
    html = "<h2>X</h2><pre><code class='language-meta'>bind: x</code></pre>"

    section = next(parser.parse_html(html).sections())

    assert section.get("bind") == "x"


def test_invalid_property_block(parser: DocumentParser) -> None:
    html = "<h2>X</h2><pre><code class='language-properties'>- not\n- a mapping</code></pre>"

    with pytest.raises(DocumentParseError):
        parser.parse_html(html)


def test_tight_list_items_get_paragraphs(parser: DocumentParser) -> None:
    document = parser.parse_html("<ul>\n<li><code>a</code></li>\n<li><code>b</code></li>\n</ul>")
    listing = document.root.children[0]

    assert listing.kind is NodeKind.LIST
    assert kinds(listing.children) == [NodeKind.LIST_ITEM, NodeKind.LIST_ITEM]
    first = listing.children[0]
    assert first.tag is None
    assert kinds(first.children) == [NodeKind.PARAGRAPH]
    assert first.children[0].children[0].text == "a"


def test_nested_list_inside_item(parser: DocumentParser) -> None:
    html = "<ul><li><code>a</code>\n<ul>\n<li><code>b</code></li>\n</ul>\n</li></ul>"

    item = parser.parse_html(html).root.children[0].children[0]

    assert kinds(item.children) == [NodeKind.PARAGRAPH, NodeKind.LIST]


def test_tight_item_tag(parser: DocumentParser) -> None:
    html = "<ul><li><code>key</code> :: <code>value</code></li></ul>"

    item = parser.parse_html(html).root.children[0].children[0]

    assert item.tag is not None
    assert kinds(item.tag) == [NodeKind.VERBATIM]
    assert item.tag[0].text == "key"
    assert kinds(item.children) == [NodeKind.PARAGRAPH]
    assert item.children[0].children[0].text == "value"


def test_loose_item_tag_with_nested_list(parser: DocumentParser) -> None:
    html = (
        "<ul><li>\n<p><code>term</code> :: <code>a</code></p>\n"
        "<ul><li><code>b</code></li></ul>\n</li></ul>"
    )

    item = parser.parse_html(html).root.children[0].children[0]

    assert item.tag is not None and item.tag[0].text == "term"
    assert kinds(item.children) == [NodeKind.PARAGRAPH, NodeKind.LIST]


def test_tag_without_definition(parser: DocumentParser) -> None:
    item = parser.parse_html("<ul><li><code>flag</code> ::</li></ul>").root.children[0].children[0]

    assert item.tag is not None
    assert item.children == ()


def test_double_colon_inside_code_is_not_a_tag(parser: DocumentParser) -> None:
    item = parser.parse_html("<ul><li><code>a :: b</code></li></ul>").root.children[0].children[0]

    assert item.tag is None


def test_definition_lists(parser: DocumentParser) -> None:
    html = (
        "<dl>\n<dt><code>a</code></dt>\n<dd><code>one</code></dd>\n"
        "<dt><code>b</code></dt>\n<dd><code>two</code></dd>\n<dd><code>three</code></dd>\n</dl>"
    )

    definitions = parser.parse_html(html).root.children[0]

    assert definitions.kind is NodeKind.DEFINITION_LIST
    first, second = definitions.children
    assert first.tag is not None and first.tag[0].text == "a"
    assert len(first.children) == 1
    assert len(second.children) == 2


def test_unrecognized_markup(parser: DocumentParser) -> None:
    document = parser.parse_html("<p><em>emphasis</em></p><table><tr><td>x</td></tr></table>")
    paragraph, table = document.root.children

    assert paragraph.children[0].kind is NodeKind.UNKNOWN
    assert paragraph.children[0].name == "em"
    assert table.kind is NodeKind.UNKNOWN


def test_comments_and_blank_text_are_ignored(parser: DocumentParser) -> None:
    document = parser.parse_html("\n<!-- note -->\n<p><code>x</code></p>\n")

    assert kinds(document.root.children) == [NodeKind.PARAGRAPH]


def test_nodes_are_immutable(parser: DocumentParser) -> None:
    section = next(parser.parse_html("<h1 bind='x'>T</h1>").sections())

    with pytest.raises(TypeError):
        section.attributes["bind"] = "y"  # type: ignore[index]
    with pytest.raises(AttributeError):
        section.text = "changed"  # type: ignore[misc]


def test_markdown_front_matter(parser: DocumentParser) -> None:
    document = parser.parse_markdown("---\ntitle: Settings\n---\n\n# Heading\n")

    assert document.front_matter == {"title": "Settings"}
    assert [section.text for section in document.sections()] == ["Heading"]


def test_front_matter_does_not_become_content(parser: DocumentParser) -> None:
    document = parser.parse_markdown("---\ntitle: Settings\n---\n\n`value`\n")

    kinds = [child.kind for child in document.root.children]
    assert kinds == [NodeKind.PARAGRAPH]
    assert document.root.children[0].children[0].text == "value"
