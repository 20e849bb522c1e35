"""Assignment of bindings into a namespace."""

from __future__ import annotations

from collections.abc import Iterable, MutableMapping
import logging
from types import ModuleType
from typing import Any, Protocol, runtime_checkable

from .values import Binding, to_python


logger = logging.getLogger(__name__)


@runtime_checkable
class Namespace(Protocol):
    """Store receiving bound values."""

    def set(self, name: str, value: Any) -> None: ...


class DictNamespace:
    """Namespace backed by a mutable mapping, such as evaluator globals."""

    def __init__(self, mapping: MutableMapping[str, Any] | None = None) -> None:
        self.mapping: MutableMapping[str, Any] = {} if mapping is None else mapping

    def set(self, name: str, value: Any) -> None:
        self.mapping[name] = value


class ModuleNamespace:
    """Namespace setting attributes on a module."""

    def __init__(self, module: ModuleType) -> None:
        self.module = module

    def set(self, name: str, value: Any) -> None:
        setattr(self.module, name, value)


def bind(bindings: Iterable[Binding], namespace: Namespace, *, unwrap: bool = True) -> None:
    """Assign ``bindings`` in order; a repeated name keeps its last value."""
    for binding in bindings:
        value = to_python(binding.value) if unwrap else binding.value
        namespace.set(binding.name, value)
        logger.debug("Assigned %s", binding.name)


__all__ = ["DictNamespace", "ModuleNamespace", "Namespace", "bind"]
