"""Read-only page structure used by the extraction pipeline.

The pipeline only needs four capabilities from a rendered page: descendant
queries, bounded nearest-ancestor queries, trimmed text, and attribute /
class values. PageNode names them; SoupNode provides them over a
BeautifulSoup snapshot of ``page.content()`` so extraction runs on an
immutable copy of the DOM and never touches the live browser.
"""

from typing import Protocol

import soupsieve as sv
from bs4 import BeautifulSoup, Tag

DEFAULT_MAX_ASCENT = 25


class PageNode(Protocol):
    def select(self, marker: str) -> list["PageNode"]: ...

    def closest(
        self, marker: str, max_depth: int = DEFAULT_MAX_ASCENT
    ) -> "PageNode | None": ...

    def text(self) -> str: ...

    def attribute(self, name: str) -> str | None: ...

    def class_name(self) -> str: ...

    def tag_name(self) -> str: ...


class SoupNode:
    """PageNode backed by a BeautifulSoup tag; markers are CSS selectors."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    @classmethod
    def from_html(cls, html: str, parser: str = "lxml") -> "SoupNode":
        """Parse an HTML document into a snapshot root node."""
        return cls(BeautifulSoup(html, parser))

    def select(self, marker: str) -> list["SoupNode"]:
        return [SoupNode(tag) for tag in self._tag.select(marker)]

    def closest(self, marker: str, max_depth: int = DEFAULT_MAX_ASCENT) -> "SoupNode | None":
        """Nearest strict ancestor matching ``marker``, at most ``max_depth`` levels up."""
        for depth, parent in enumerate(self._tag.parents, start=1):
            # The document object is not an element and cannot match
            if depth > max_depth or isinstance(parent, BeautifulSoup):
                return None
            if sv.match(marker, parent):
                return SoupNode(parent)
        return None

    def text(self) -> str:
        return self._tag.get_text().strip()

    def attribute(self, name: str) -> str | None:
        value = self._tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def class_name(self) -> str:
        return self.attribute("class") or ""

    def tag_name(self) -> str:
        return self._tag.name

    def __repr__(self) -> str:
        return f"SoupNode(<{self._tag.name} class={self.class_name()!r}>)"
