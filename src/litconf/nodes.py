"""Document tree consumed by the value converter.

The parser turns rendered Markdown into a small, closed vocabulary of node
kinds. Nodes are immutable: the converter only ever reads them, and values it
produces never alias back into the tree.

Kinds

`DOCUMENT`
: synthetic root holding top-level content and sections.

`SECTION`
: a heading together with everything up to the next heading of the same or a
  higher level. Heading attributes (``attr_list``) and property blocks become the
  section attributes.

`PARAGRAPH`, `VERBATIM`, `CODE_SPAN`, `CODE_BLOCK`
: prose and code markup carrying values.

`LIST`, `LIST_ITEM`, `DEFINITION_LIST`
: ordered containers; list items optionally carry a ``term ::`` tag.

`ATTRIBUTES`
: metadata block attached to a section, never a value.

`TEXT`, `UNKNOWN`
: bare text leaves and any markup outside the convention.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any


class NodeKind(Enum):
    """Closed set of node kinds produced by the document parser."""

    DOCUMENT = "document"
    SECTION = "section"
    PARAGRAPH = "paragraph"
    VERBATIM = "verbatim"
    CODE_SPAN = "code-span"
    CODE_BLOCK = "code-block"
    LIST = "list"
    LIST_ITEM = "list-item"
    DEFINITION_LIST = "definition-list"
    ATTRIBUTES = "attributes"
    TEXT = "text"
    UNKNOWN = "unknown"


_EMPTY: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Node:
    """Immutable node of the parsed document tree."""

    kind: NodeKind
    children: tuple[Node, ...] = ()
    attributes: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    text: str | None = None
    tag: tuple[Node, ...] | None = None
    language: str | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.attributes, MappingProxyType):
            object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def get(self, attribute: str) -> str | None:
        """Return a section attribute, or ``None`` when it is missing or blank."""
        value = self.attributes.get(attribute)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @property
    def content(self) -> tuple[Node, ...]:
        """Children carrying content: attribute blocks and subsections excluded."""
        return tuple(
            child
            for child in self.children
            if child.kind not in (NodeKind.ATTRIBUTES, NodeKind.SECTION)
        )

    def describe(self) -> str:
        """Short human readable label used in diagnostics."""
        label = self.kind.value
        if self.name and self.name != label:
            label = f"{label} <{self.name}>"
        if self.text:
            snippet = self.text.strip().splitlines()[0] if self.text.strip() else ""
            if len(snippet) > 40:
                snippet = snippet[:37] + "..."
            if snippet:
                label = f"{label} {snippet!r}"
        return label

    def walk(self) -> Iterator[Node]:
        """Yield this node and its descendants depth first, in document order."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True, slots=True)
class Document:
    """Parsed document: a root node plus front matter metadata.

    Front matter is split off before rendering so a leading ``---`` block does
    not turn into a rule and a paragraph. Bindings never read it; it is kept
    for callers that want the document metadata.
    """

    root: Node
    front_matter: dict[str, Any] = field(default_factory=dict)
    source: Path | None = None

    def sections(self) -> Iterator[Node]:
        """Yield every section node in document order."""
        for node in self.root.walk():
            if node.kind is NodeKind.SECTION:
                yield node


__all__ = ["Document", "Node", "NodeKind"]
