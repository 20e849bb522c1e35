"""Configuration model for document loading.

LoaderConfig

`marker` (`str`)
: Section attribute naming the variable to bind. Set it on a heading with
  ``attr_list`` (``## Font {: bind=default_font }``) or in a property block.

`markdown_extensions` (`list[str]`)
: Additional Markdown extensions enabled on top of the defaults.

`disabled_extensions` (`list[str]`)
: Default Markdown extensions to turn off.

`attributes_language` (`str`)
: Fence language marking a property block (defaults to ``properties``).

`parser` (`str`)
: BeautifulSoup parser used on the rendered HTML.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .extractor import DEFAULT_MARKER
from .markdown import normalize_markdown_extensions, resolve_markdown_extensions
from .parser import DEFAULT_ATTRIBUTES_LANGUAGE


class LoaderConfig(BaseModel):
    """Options controlling how documents are parsed and bound."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    marker: str = Field(default=DEFAULT_MARKER, min_length=1)
    markdown_extensions: list[str] = Field(default_factory=list)
    disabled_extensions: list[str] = Field(default_factory=list)
    attributes_language: str = Field(default=DEFAULT_ATTRIBUTES_LANGUAGE, min_length=1)
    parser: str = "html.parser"

    @field_validator("marker", "attributes_language")
    @classmethod
    def _strip(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            msg = "must not be blank"
            raise ValueError(msg)
        return stripped

    @field_validator("markdown_extensions", "disabled_extensions", mode="before")
    @classmethod
    def _split_extensions(cls, value: object) -> list[str]:
        return normalize_markdown_extensions(value)  # type: ignore[arg-type]

    def extensions(self) -> list[str]:
        """Return the active Markdown extension list."""
        return resolve_markdown_extensions(self.markdown_extensions, self.disabled_extensions)


__all__ = ["LoaderConfig"]
