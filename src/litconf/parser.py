"""HTML to document tree conversion.

Python-Markdown emits a flat sequence of block elements. The parser rebuilds
the section hierarchy from heading levels and maps every element onto the
closed :class:`~litconf.nodes.NodeKind` vocabulary:

- ``<h1>``..``<h6>`` open sections; their ``attr_list`` attributes become the
  section attributes;
- fenced blocks declared with the attributes language (``properties`` by
  default) hold ``key: value`` lines merged into the enclosing section;
- ``<code>`` spans are verbatim text unless they start with a ``#!lang``
  shebang or carry a ``language-*`` class, in which case they are code spans;
- ``<pre>`` blocks (optionally wrapped in ``div.highlight``) are code blocks;
- list items whose first line contains ``term :: definition`` get a tag.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
import logging
from pathlib import Path
import re
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag
import yaml

from .exceptions import DocumentParseError
from .markdown import render_markdown
from .nodes import Document, Node, NodeKind


logger = logging.getLogger(__name__)

DEFAULT_ATTRIBUTES_LANGUAGE = "properties"

_HEADINGS = {f"h{level}": level for level in range(1, 7)}
_BLOCK_TAGS = {
    "p",
    "ul",
    "ol",
    "dl",
    "pre",
    "div",
    "blockquote",
    "table",
    "hr",
    *_HEADINGS,
}
_TAG_SEPARATOR = re.compile(r"(?:^|\s)::(?:\s|$)")
_SHEBANG = re.compile(r"^#!(?P<language>[A-Za-z0-9_+\-.]+)(?:\s+|$)")


def gather_classes(value: Any) -> list[str]:
    """Return a list of classes extracted from a BeautifulSoup attribute."""
    if isinstance(value, str):
        return value.split()
    if isinstance(value, Iterable) and not isinstance(value, (bytes, bytearray)):
        return [item for item in value if isinstance(item, str)]
    return []


def _extract_language(*elements: Tag | None) -> str | None:
    for element in elements:
        if element is None:
            continue
        for cls in gather_classes(element.get("class")):
            if cls.startswith("language-"):
                return cls[len("language-") :] or None
    return None


def _is_blank(node: PageElement) -> bool:
    return isinstance(node, NavigableString) and not str(node).strip()


def _is_ignored(node: PageElement) -> bool:
    return isinstance(node, PreformattedString) or _is_blank(node)


def _element_attributes(element: Tag) -> dict[str, str]:
    attributes: dict[str, str] = {}
    for key, value in element.attrs.items():
        attributes[key] = " ".join(value) if isinstance(value, list) else str(value)
    return attributes


@dataclass(slots=True)
class _SectionBuilder:
    level: int
    title: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node | _SectionBuilder] = field(default_factory=list)

    def freeze(self, kind: NodeKind = NodeKind.SECTION, name: str | None = None) -> Node:
        children = tuple(
            child.freeze() if isinstance(child, _SectionBuilder) else child
            for child in self.children
        )
        return Node(
            kind=kind,
            children=children,
            attributes=self.attributes,
            text=self.title,
            name=name or (f"h{self.level}" if self.level else None),
        )


class DocumentParser:
    """Build :class:`~litconf.nodes.Document` trees from rendered Markdown."""

    def __init__(
        self,
        *,
        attributes_language: str = DEFAULT_ATTRIBUTES_LANGUAGE,
        parser: str = "html.parser",
    ) -> None:
        self.attributes_language = attributes_language.lower()
        self.parser = parser

    def parse_markdown(
        self,
        source: str,
        *,
        extensions: Sequence[str] | None = None,
        path: Path | None = None,
    ) -> Document:
        """Render Markdown and parse the resulting HTML."""
        rendered = render_markdown(source, extensions)
        return self.parse_html(rendered.html, front_matter=rendered.front_matter, path=path)

    def parse_html(
        self,
        html: str,
        *,
        front_matter: Mapping[str, Any] | None = None,
        path: Path | None = None,
    ) -> Document:
        """Parse an HTML fragment into a document tree."""
        soup = BeautifulSoup(html, self.parser)
        root = _SectionBuilder(level=0)
        stack: list[_SectionBuilder] = [root]

        for element in list(soup.contents):
            if _is_ignored(element):
                continue
            if isinstance(element, Tag) and element.name in _HEADINGS:
                level = _HEADINGS[element.name]
                while len(stack) > 1 and stack[-1].level >= level:
                    stack.pop()
                section = _SectionBuilder(
                    level=level,
                    title=element.get_text(" ", strip=True),
                    attributes=_element_attributes(element),
                )
                stack[-1].children.append(section)
                stack.append(section)
                continue

            node = self._block(element)
            if node.kind is NodeKind.ATTRIBUTES:
                stack[-1].attributes.update(node.attributes)
            stack[-1].children.append(node)

        document = root.freeze(NodeKind.DOCUMENT, name="document")
        logger.debug(
            "Parsed document with %d section(s)",
            sum(1 for node in document.walk() if node.kind is NodeKind.SECTION),
        )
        return Document(root=document, front_matter=dict(front_matter or {}), source=path)

    def _block(self, element: PageElement) -> Node:
        if not isinstance(element, Tag):
            return Node(NodeKind.TEXT, text=str(element))

        name = element.name
        if name == "p":
            children = tuple(self._inlines(element.contents))
            return Node(NodeKind.PARAGRAPH, children=children, name=name)
        if name in {"ul", "ol"}:
            items = tuple(
                self._list_item(child)
                for child in element.children
                if isinstance(child, Tag) and child.name == "li"
            )
            return Node(NodeKind.LIST, children=items, name=name)
        if name == "dl":
            definitions = tuple(self._definitions(element))
            return Node(NodeKind.DEFINITION_LIST, children=definitions, name=name)
        if name == "pre":
            return self._code_block(element)
        if name == "div" and "highlight" in gather_classes(element.get("class")):
            pre = element.find("pre")
            if pre is not None:
                return self._code_block(pre, wrapper=element)
        return Node(NodeKind.UNKNOWN, name=name, text=element.get_text())

    def _code_block(self, pre: Tag, *, wrapper: Tag | None = None) -> Node:
        code = pre.find("code")
        language = _extract_language(code, pre, wrapper)
        text = (code or pre).get_text()
        if language is not None and language.lower() == self.attributes_language:
            return Node(
                NodeKind.ATTRIBUTES,
                attributes=_parse_properties(text),
                text=text,
                language=language,
                name="pre",
            )
        return Node(NodeKind.CODE_BLOCK, text=text, language=language, name="pre")

    def _inlines(self, contents: Iterable[PageElement]) -> Iterator[Node]:
        for child in contents:
            if _is_ignored(child):
                continue
            if isinstance(child, NavigableString):
                yield Node(NodeKind.TEXT, text=str(child))
            elif isinstance(child, Tag) and child.name == "code":
                yield _code_span(child)
            elif isinstance(child, Tag):
                yield Node(NodeKind.UNKNOWN, name=child.name, text=child.get_text())

    def _content(self, contents: Sequence[PageElement]) -> list[Node]:
        """Build item content: inline runs become paragraphs, blocks stay blocks."""
        nodes: list[Node] = []
        run: list[PageElement] = []

        def flush() -> None:
            if any(not _is_ignored(item) for item in run):
                nodes.append(Node(NodeKind.PARAGRAPH, children=tuple(self._inlines(run)), name="p"))
            run.clear()

        for child in contents:
            if isinstance(child, Tag) and child.name in _BLOCK_TAGS:
                flush()
                nodes.append(self._block(child))
            else:
                run.append(child)
        flush()
        return nodes

    def _list_item(self, element: Tag) -> Node:
        contents = list(element.contents)
        tag: tuple[Node, ...] | None = None

        position, first = next(
            ((index, child) for index, child in enumerate(contents) if not _is_ignored(child)),
            (len(contents), None),
        )
        if isinstance(first, Tag) and first.name == "p":
            split = _split_tag(list(first.contents))
            if split is not None:
                head, body = split
                tag = tuple(self._inlines(head))
                paragraph = Node(NodeKind.PARAGRAPH, children=tuple(self._inlines(body)), name="p")
                rest = contents[position + 1 :]
                children = ([paragraph] if paragraph.children else []) + self._content(rest)
                return Node(NodeKind.LIST_ITEM, children=tuple(children), tag=tag, name="li")
        else:
            boundary = next(
                (
                    index
                    for index, child in enumerate(contents)
                    if isinstance(child, Tag) and child.name in _BLOCK_TAGS
                ),
                len(contents),
            )
            split = _split_tag(contents[:boundary])
            if split is not None:
                head, body = split
                tag = tuple(self._inlines(head))
                contents = body + contents[boundary:]

        return Node(NodeKind.LIST_ITEM, children=tuple(self._content(contents)), tag=tag, name="li")

    def _definitions(self, element: Tag) -> Iterator[Node]:
        term: Tag | None = None
        bodies: list[Node] = []
        for child in element.children:
            if not isinstance(child, Tag):
                continue
            if child.name == "dt":
                if term is not None:
                    yield self._definition(term, bodies)
                term, bodies = child, []
            elif child.name == "dd":
                bodies.extend(self._content(list(child.contents)))
        if term is not None:
            yield self._definition(term, bodies)

    def _definition(self, term: Tag, bodies: list[Node]) -> Node:
        return Node(
            NodeKind.LIST_ITEM,
            children=tuple(bodies),
            tag=tuple(self._inlines(term.contents)),
            name="dt",
        )


def _code_span(element: Tag) -> Node:
    text = element.get_text()
    language = _extract_language(element)
    if language is None:
        shebang = _SHEBANG.match(text)
        if shebang is None:
            return Node(NodeKind.VERBATIM, text=text, name="code")
        language = shebang.group("language")
        text = text[shebang.end() :]
    return Node(NodeKind.CODE_SPAN, text=text, language=language, name="code")


def _split_tag(
    contents: list[PageElement],
) -> tuple[list[PageElement], list[PageElement]] | None:
    """Split inline contents around the first ``::`` separator found in text."""
    for index, child in enumerate(contents):
        if not isinstance(child, NavigableString) or isinstance(child, PreformattedString):
            continue
        text = str(child)
        match = _TAG_SEPARATOR.search(text)
        if match is None:
            continue
        before, after = text[: match.start()], text[match.end() :]
        head = contents[:index] + ([NavigableString(before)] if before.strip() else [])
        body = ([NavigableString(after)] if after.strip() else []) + contents[index + 1 :]
        return head, body
    return None


def _parse_properties(text: str) -> dict[str, str]:
    try:
        payload = yaml.safe_load(text) if text.strip() else {}
    except yaml.YAMLError as exc:
        raise DocumentParseError(f"Invalid property block: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise DocumentParseError("Property blocks must contain 'key: value' lines")
    return {str(key): "" if value is None else str(value) for key, value in payload.items()}


__all__ = ["DEFAULT_ATTRIBUTES_LANGUAGE", "DocumentParser", "gather_classes"]
