"""Reader for the datums written in inline code spans.

A code span holds exactly one datum: a Python literal, possibly nested, in which
bare or dotted names stand for symbols. Reading never evaluates anything. Only
the first form of the text is read; whatever follows it is ignored.

    >>> read_datum("(1, 'two', three)")
    (1, 'two', Symbol(name='three'))
    >>> read_datum("fill_column ignored")
    Symbol(name='fill_column')
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
import io
import tokenize
from typing import Any


_OPENING = {"(", "[", "{"}
_CLOSING = {")", "]", "}"}
_SKIPPED = {
    tokenize.ENCODING,
    tokenize.INDENT,
    tokenize.DEDENT,
    tokenize.NL,
    tokenize.COMMENT,
}


@dataclass(frozen=True, slots=True)
class Symbol:
    """Name read from a datum, kept distinct from string literals."""

    name: str

    def __str__(self) -> str:
        return self.name


def first_form(text: str) -> str:
    """Return the source of the first complete form in ``text``.

    A form ends at the first whitespace gap found outside brackets, or at the end
    of the logical line.
    """
    source = text.strip()
    if not source:
        msg = "Cannot read a datum from empty text"
        raise ValueError(msg)

    readline = io.StringIO(source).readline
    depth = 0
    start: tuple[int, int] | None = None
    end: tuple[int, int] | None = None
    try:
        for token in tokenize.generate_tokens(readline):
            if token.type in _SKIPPED:
                continue
            if token.type in (tokenize.NEWLINE, tokenize.ENDMARKER):
                if depth == 0:
                    break
                continue
            if start is None:
                start = token.start
            elif depth == 0 and token.start != end:
                break
            if token.type == tokenize.OP and token.string in _OPENING:
                depth += 1
            elif token.type == tokenize.OP and token.string in _CLOSING:
                depth -= 1
            end = token.end
    except tokenize.TokenError as exc:
        raise SyntaxError(f"Incomplete datum: {source!r}") from exc

    if start is None or end is None:
        msg = f"Cannot read a datum from {text!r}"
        raise ValueError(msg)
    return _slice(source, start, end)


def _slice(source: str, start: tuple[int, int], end: tuple[int, int]) -> str:
    lines = source.splitlines(keepends=True)
    (start_row, start_col), (end_row, end_col) = start, end
    if start_row == end_row:
        return lines[start_row - 1][start_col:end_col]
    parts = [lines[start_row - 1][start_col:]]
    parts.extend(lines[start_row : end_row - 1])
    parts.append(lines[end_row - 1][:end_col])
    return "".join(parts)


def read_datum(text: str) -> Any:
    """Read exactly one datum from ``text`` without evaluating it."""
    form = first_form(text)
    tree = ast.parse(form, mode="eval")
    return _build(tree.body, form)


def _build(node: ast.expr, source: str) -> Any:
    if isinstance(node, ast.Constant):
        return node.value
    if isinstance(node, ast.Name):
        return Symbol(node.id)
    if isinstance(node, ast.Attribute):
        return Symbol(_dotted(node, source))
    if isinstance(node, ast.Tuple):
        return tuple(_build(item, source) for item in node.elts)
    if isinstance(node, ast.List):
        return [_build(item, source) for item in node.elts]
    if isinstance(node, ast.Set):
        return {_build(item, source) for item in node.elts}
    if isinstance(node, ast.Dict):
        if any(key is None for key in node.keys):
            raise ValueError(f"Dictionary unpacking is not a datum: {source!r}")
        return {
            _build(key, source): _build(value, source)
            for key, value in zip(node.keys, node.values, strict=True)
        }
    if (
        isinstance(node, ast.UnaryOp)
        and isinstance(node.op, (ast.USub, ast.UAdd))
        and isinstance(node.operand, ast.Constant)
        and isinstance(node.operand.value, (int, float, complex))
        and not isinstance(node.operand.value, bool)
    ):
        value = node.operand.value
        return -value if isinstance(node.op, ast.USub) else +value
    raise ValueError(f"Not a datum: {source!r}")


def _dotted(node: ast.expr, source: str) -> str:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return f"{_dotted(node.value, source)}.{node.attr}"
    raise ValueError(f"Not a datum: {source!r}")


__all__ = ["Symbol", "first_form", "read_datum"]
