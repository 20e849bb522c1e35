"""Custom exception hierarchy for the document conversion pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .nodes import Node


class LitconfError(RuntimeError):
    """Base exception for document conversion failures."""


class DocumentParseError(LitconfError):
    """Raised when a source cannot be read or rendered into a document tree."""


class UnknownLanguageError(LitconfError):
    """Raised when a code fragment declares a language other than Python."""

    def __init__(self, language: str | None) -> None:
        self.language = language
        super().__init__(f"Unsupported code language: {language or '<none>'!s}")


class UnexpectedNodeError(LitconfError):
    """Raised when the converter reaches a node that does not carry a value."""

    def __init__(self, node: Node) -> None:
        self.node = node
        super().__init__(f"Unexpected {node.describe()} where a value was expected")


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "DocumentParseError",
    "LitconfError",
    "UnexpectedNodeError",
    "UnknownLanguageError",
    "exception_hint",
    "exception_messages",
]
