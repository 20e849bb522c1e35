"""Recursive conversion of document nodes into values.

Conversion is a pure function of the subtree, except for code blocks: those
are evaluated, and evaluation may have arbitrary side effects. Malformed input
is never silently skipped. A node that carries no value raises
:class:`~litconf.exceptions.UnexpectedNodeError` and a code fragment in a
foreign language raises :class:`~litconf.exceptions.UnknownLanguageError`.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging

from .evaluation import PYTHON_ALIASES, Evaluator, PythonEvaluator
from .exceptions import UnexpectedNodeError, UnknownLanguageError
from .nodes import Node, NodeKind
from .reader import read_datum
from .values import ArbitraryValue, DatumValue, ListValue, PairValue, StringValue, Value


logger = logging.getLogger(__name__)


class ValueConverter:
    """Convert nodes into values, evaluating code blocks with ``evaluator``."""

    def __init__(self, evaluator: Evaluator | None = None) -> None:
        self.evaluator = evaluator if evaluator is not None else PythonEvaluator()

    def convert(self, node: Node) -> Value:
        """Return the value carried by ``node``."""
        match node.kind:
            case NodeKind.PARAGRAPH:
                # Only the first token carries the value; the rest is commentary.
                if not node.children:
                    raise UnexpectedNodeError(node)
                return self.convert(node.children[0])
            case NodeKind.VERBATIM:
                return StringValue(node.text or "")
            case NodeKind.CODE_SPAN:
                if not _is_host_language(node.language):
                    raise UnknownLanguageError(node.language)
                return DatumValue(read_datum(node.text or ""))
            case NodeKind.CODE_BLOCK:
                if not self.evaluator.accepts(node.language):
                    raise UnknownLanguageError(node.language)
                logger.debug("Evaluating %s block", node.language)
                return ArbitraryValue(self.evaluator.evaluate(node.text or ""))
            case NodeKind.LIST | NodeKind.DEFINITION_LIST:
                return ListValue(
                    tuple(
                        self.convert(child)
                        for child in node.children
                        if child.kind is NodeKind.LIST_ITEM
                    )
                )
            case NodeKind.LIST_ITEM:
                return self._convert_item(node)
            case (
                NodeKind.DOCUMENT
                | NodeKind.SECTION
                | NodeKind.ATTRIBUTES
                | NodeKind.TEXT
                | NodeKind.UNKNOWN
            ):
                raise UnexpectedNodeError(node)
        raise UnexpectedNodeError(node)  # pragma: no cover - exhaustive match

    def _convert_item(self, node: Node) -> Value:
        rest = self._convert_body(node.children)
        if node.tag is None:
            return rest
        if not node.tag:
            raise UnexpectedNodeError(node)
        return PairValue(self.convert(node.tag[0]), rest)

    def _convert_body(self, children: Sequence[Node]) -> Value:
        if len(children) == 1:
            return self.convert(children[0])

        items: list[Value] = []
        for child in children:
            value = self.convert(child)
            if isinstance(value, ListValue):
                items.extend(value.items)
            else:
                items.append(value)
        return ListValue(tuple(items))


def _is_host_language(language: str | None) -> bool:
    return language is not None and language.strip().lower() in PYTHON_ALIASES


def convert(node: Node, evaluator: Evaluator | None = None) -> Value:
    """Convert ``node`` into a value."""
    return ValueConverter(evaluator).convert(node)


__all__ = ["ValueConverter", "convert"]
