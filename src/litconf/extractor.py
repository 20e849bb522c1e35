"""Binding extraction from parsed documents."""

from __future__ import annotations

from collections.abc import Iterator
import logging

from .converter import ValueConverter
from .evaluation import Evaluator
from .nodes import Document, Node
from .values import Binding


logger = logging.getLogger(__name__)

DEFAULT_MARKER = "bind"


def value_root(section: Node) -> Node | None:
    """Return the first content child of ``section``, skipping attribute blocks."""
    content = section.content
    return content[0] if content else None


def iter_bindings(
    document: Document,
    evaluator: Evaluator | None = None,
    *,
    marker: str = DEFAULT_MARKER,
) -> Iterator[Binding]:
    """Yield bindings section by section, in document order.

    Conversion errors propagate as soon as they occur; bindings already
    yielded are left to the caller.
    """
    converter = ValueConverter(evaluator)
    for section in document.sections():
        name = section.get(marker)
        if name is None:
            continue
        root = value_root(section)
        if root is None:
            logger.debug("Section %r marks %r but has no content; skipped", section.text, name)
            continue
        binding = Binding.create(name, converter.convert(root))
        logger.debug("Bound %s from section %r", binding.name, section.text)
        yield binding


def extract_bindings(
    document: Document,
    evaluator: Evaluator | None = None,
    *,
    marker: str = DEFAULT_MARKER,
) -> list[Binding]:
    """Convert every marked section of ``document`` into a binding."""
    return list(iter_bindings(document, evaluator, marker=marker))


__all__ = ["DEFAULT_MARKER", "extract_bindings", "iter_bindings", "value_root"]
