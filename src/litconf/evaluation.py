"""Evaluation of embedded code blocks.

Converting a document may run the code it contains: the document must be
trusted by whoever loads it. The evaluator is injected into the converter so
callers control which namespace code runs in, or swap in a restricted
implementation.

A block is a whole program, not a single form: every statement runs, and the
value of the block is its trailing expression. A block holding ``1`` and ``2``
on two lines evaluates to ``2``.
"""

from __future__ import annotations

import ast
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)

HOST_LANGUAGE = "python"
PYTHON_ALIASES = frozenset({"python", "py", "python3"})


@runtime_checkable
class Evaluator(Protocol):
    """Interface used by the converter to evaluate code blocks."""

    language: str

    def accepts(self, language: str | None) -> bool: ...

    def evaluate(self, source: str) -> Any: ...


class PythonEvaluator:
    """Run Python code blocks in a shared, mutable namespace.

    Every statement of a block runs in order; when the block ends with an
    expression, its value is the result of the block, otherwise the result is
    ``None``. Blocks evaluated by the same instance see each other's globals.
    """

    language = HOST_LANGUAGE

    def __init__(
        self,
        namespace: dict[str, Any] | None = None,
        *,
        aliases: frozenset[str] = PYTHON_ALIASES,
        filename: str = "<litconf>",
    ) -> None:
        self.namespace: dict[str, Any] = {} if namespace is None else namespace
        self.aliases = frozenset(alias.lower() for alias in aliases) | {HOST_LANGUAGE}
        self.filename = filename

    def accepts(self, language: str | None) -> bool:
        """Return whether a block declared with ``language`` can be evaluated."""
        return bool(language) and language.strip().lower() in self.aliases

    def evaluate(self, source: str) -> Any:
        """Evaluate ``source`` and return the value of its trailing expression."""
        module = ast.parse(source, filename=self.filename, mode="exec")
        if not module.body:
            return None

        tail = module.body[-1]
        statements = module.body[:-1] if isinstance(tail, ast.Expr) else module.body
        if statements:
            body = ast.Module(body=list(statements), type_ignores=[])
            exec(compile(body, self.filename, "exec"), self.namespace)  # noqa: S102
        if not isinstance(tail, ast.Expr):
            return None

        expression = ast.Expression(body=tail.value)
        result = eval(compile(expression, self.filename, "eval"), self.namespace)  # noqa: S307
        logger.debug("Evaluated code block returning %s", type(result).__name__)
        return result


__all__ = ["HOST_LANGUAGE", "PYTHON_ALIASES", "Evaluator", "PythonEvaluator"]
