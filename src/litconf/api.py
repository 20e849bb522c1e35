"""High-level entry points: parse a document, compute bindings, load them.

Typical usage::

    from litconf import bindings_for_document, load_from_document

    for name, value in bindings_for_document("settings.md"):
        print(name, value)

    settings: dict[str, object] = {}
    load_from_document("settings.md", DictNamespace(settings))

Both functions evaluate the Python code blocks found in the document. Only
load trusted documents.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TextIO

from .binder import DictNamespace, Namespace, bind
from .config import LoaderConfig
from .evaluation import Evaluator, PythonEvaluator
from .exceptions import DocumentParseError
from .extractor import extract_bindings
from .nodes import Document
from .parser import DocumentParser
from .values import Binding


logger = logging.getLogger(__name__)

DocumentSource = str | os.PathLike[str] | TextIO


def _read_source(source: DocumentSource) -> tuple[str, Path | None]:
    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        try:
            return path.read_text(encoding="utf-8"), path
        except OSError as exc:
            raise DocumentParseError(f"Unable to read '{path}': {exc}") from exc
    name = getattr(source, "name", None)
    return source.read(), Path(name) if isinstance(name, str) else None


def parse_document(source: DocumentSource, *, config: LoaderConfig | None = None) -> Document:
    """Read and parse a Markdown document from a path or a text handle."""
    settings = config or LoaderConfig()
    text, path = _read_source(source)
    parser = DocumentParser(
        attributes_language=settings.attributes_language,
        parser=settings.parser,
    )
    return parser.parse_markdown(text, extensions=settings.extensions(), path=path)


def bindings_for_document(
    source: DocumentSource,
    *,
    config: LoaderConfig | None = None,
    evaluator: Evaluator | None = None,
) -> list[Binding]:
    """Return the bindings declared by a document without assigning them."""
    settings = config or LoaderConfig()
    document = parse_document(source, config=settings)
    bindings = extract_bindings(document, evaluator, marker=settings.marker)
    logger.info("Collected %d binding(s) from %s", len(bindings), document.source or "<stream>")
    return bindings


def load_from_document(
    source: DocumentSource,
    namespace: Namespace | None = None,
    *,
    config: LoaderConfig | None = None,
    evaluator: Evaluator | None = None,
) -> list[Binding]:
    """Compute every binding of a document, then assign them in order.

    Nothing is assigned when a section fails to convert. Without an explicit
    namespace, values land in the globals of the evaluator, so code blocks of
    later loads can refer to them. An evaluator exposing no ``namespace``
    dictionary requires an explicit target.
    """
    if evaluator is None:
        evaluator = PythonEvaluator()
    if namespace is None:
        globals_ = getattr(evaluator, "namespace", None)
        if not isinstance(globals_, dict):
            msg = (
                f"{type(evaluator).__name__} exposes no namespace dictionary; "
                "pass an explicit namespace to load_from_document()"
            )
            raise TypeError(msg)
        namespace = DictNamespace(globals_)

    bindings = bindings_for_document(source, config=config, evaluator=evaluator)
    bind(bindings, namespace)
    return bindings


__all__ = [
    "DocumentSource",
    "bindings_for_document",
    "load_from_document",
    "parse_document",
]
