"""Literate configuration: bind named values declared in Markdown documents."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from litconf.api import (
    DocumentSource,
    bindings_for_document,
    load_from_document,
    parse_document,
)
from litconf.binder import DictNamespace, ModuleNamespace, Namespace, bind
from litconf.config import LoaderConfig
from litconf.converter import ValueConverter, convert
from litconf.evaluation import Evaluator, PythonEvaluator
from litconf.exceptions import (
    DocumentParseError,
    LitconfError,
    UnexpectedNodeError,
    UnknownLanguageError,
)
from litconf.extractor import extract_bindings, iter_bindings
from litconf.nodes import Document, Node, NodeKind
from litconf.parser import DocumentParser
from litconf.reader import Symbol, read_datum
from litconf.values import (
    ArbitraryValue,
    Binding,
    DatumValue,
    ListValue,
    PairValue,
    StringValue,
    Value,
    to_python,
)


try:
    __version__ = _pkg_version("litconf")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "ArbitraryValue",
    "Binding",
    "DatumValue",
    "DictNamespace",
    "Document",
    "DocumentParseError",
    "DocumentParser",
    "DocumentSource",
    "Evaluator",
    "ListValue",
    "LitconfError",
    "LoaderConfig",
    "ModuleNamespace",
    "Namespace",
    "Node",
    "NodeKind",
    "PairValue",
    "PythonEvaluator",
    "StringValue",
    "Symbol",
    "UnexpectedNodeError",
    "UnknownLanguageError",
    "Value",
    "ValueConverter",
    "__version__",
    "bind",
    "bindings_for_document",
    "convert",
    "extract_bindings",
    "iter_bindings",
    "load_from_document",
    "parse_document",
    "read_datum",
    "to_python",
]
