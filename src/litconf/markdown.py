"""Markdown rendering utilities for litconf."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import re
from threading import Lock
from typing import Any

import markdown
import yaml

from .exceptions import DocumentParseError


__all__ = [
    "DEFAULT_MARKDOWN_EXTENSIONS",
    "MarkdownDocument",
    "deduplicate_markdown_extensions",
    "normalize_markdown_extensions",
    "render_markdown",
    "resolve_markdown_extensions",
    "split_front_matter",
]


DEFAULT_MARKDOWN_EXTENSIONS = [
    "attr_list",
    "def_list",
    "sane_lists",
    "pymdownx.highlight",
    "pymdownx.superfences",
    "pymdownx.saneheaders",
]


DEFAULT_EXTENSION_CONFIGS: dict[str, dict[str, object]] = {
    "pymdownx.highlight": {
        "use_pygments": False,
    },
}


@dataclass(slots=True)
class MarkdownDocument:
    """Result of converting Markdown into HTML."""

    html: str
    front_matter: dict[str, Any]


class _MarkdownCacheEntry:
    __slots__ = ("lock", "processor")

    def __init__(self, processor: markdown.Markdown) -> None:
        self.processor = processor
        self.lock = Lock()


_MARKDOWN_CACHE: dict[tuple[str, ...], _MarkdownCacheEntry] = {}
_MARKDOWN_CACHE_GUARD = Lock()


def resolve_markdown_extensions(
    requested: Iterable[str] | None,
    disabled: Iterable[str] | None,
) -> list[str]:
    """Return the active Markdown extension list after applying overrides."""
    enabled = normalize_markdown_extensions(requested)
    disabled_normalized = {
        extension.lower() for extension in normalize_markdown_extensions(disabled)
    }

    combined = deduplicate_markdown_extensions(list(DEFAULT_MARKDOWN_EXTENSIONS) + enabled)

    if not disabled_normalized:
        return combined

    return [extension for extension in combined if extension.lower() not in disabled_normalized]


def deduplicate_markdown_extensions(values: Iterable[str]) -> list[str]:
    """Remove duplicate extensions while preserving order and case."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if not isinstance(value, str):
            continue
        key = value.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(value)
    return result


def normalize_markdown_extensions(
    values: Iterable[str] | str | None,
) -> list[str]:
    """Normalise extension names from CLI-friendly strings into a flat list."""
    if values is None:
        return []

    if isinstance(values, str):
        candidates: Iterable[str] = [values]
    else:
        candidates = values

    normalized: list[str] = []
    for value in candidates:
        if not isinstance(value, str):
            continue
        chunks = re.split(r"[,\s\x00]+", value)
        normalized.extend(chunk for chunk in chunks if chunk)
    return normalized


def render_markdown(
    source: str,
    extensions: Sequence[str] | None = None,
) -> MarkdownDocument:
    """Convert Markdown source into HTML while collecting front matter."""
    metadata, markdown_body = split_front_matter(source)

    active_extensions = tuple(
        DEFAULT_MARKDOWN_EXTENSIONS if extensions is None else extensions
    )
    entry = _resolve_markdown_entry(active_extensions)

    try:
        with entry.lock:
            processor = entry.processor
            processor.reset()
            html = processor.convert(markdown_body)
    except Exception as exc:  # pragma: no cover - library-controlled
        raise DocumentParseError(f"Failed to convert Markdown source: {exc}") from exc

    return MarkdownDocument(html=html, front_matter=metadata)


def split_front_matter(source: str) -> tuple[dict[str, Any], str]:
    """Split YAML front matter from Markdown content, returning metadata and body."""
    candidate = source.lstrip("\ufeff")
    lines = candidate.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, source

    front_matter_lines: list[str] = []
    closing_index: int | None = None
    for idx, line in enumerate(lines[1:], start=1):
        stripped = line.strip()
        if stripped in {"---", "..."}:
            closing_index = idx
            break
        front_matter_lines.append(line)

    if closing_index is None:
        return {}, source

    raw_block = "\n".join(front_matter_lines)
    try:
        metadata = yaml.safe_load(raw_block) or {}
    except yaml.YAMLError:
        return {}, source

    if not isinstance(metadata, dict):
        metadata = {}

    body = "\n".join(lines[closing_index + 1 :])
    if source.endswith("\n"):
        body += "\n"
    return metadata, body


def _resolve_markdown_entry(extensions_key: tuple[str, ...]) -> _MarkdownCacheEntry:
    entry = _MARKDOWN_CACHE.get(extensions_key)
    if entry is not None:
        return entry
    with _MARKDOWN_CACHE_GUARD:
        entry = _MARKDOWN_CACHE.get(extensions_key)
        if entry is None:
            entry = _MarkdownCacheEntry(_build_markdown_processor(extensions_key))
            _MARKDOWN_CACHE[extensions_key] = entry
    return entry


def _build_markdown_processor(extensions_key: tuple[str, ...]) -> markdown.Markdown:
    active_extensions = list(extensions_key)
    extension_configs = {
        name: dict(DEFAULT_EXTENSION_CONFIGS[name])
        for name in active_extensions
        if name in DEFAULT_EXTENSION_CONFIGS
    }

    try:
        return markdown.Markdown(extensions=active_extensions, extension_configs=extension_configs)
    except Exception as exc:
        raise DocumentParseError(f"Failed to initialize Markdown processor: {exc}") from exc
