"""
Typed view over a parsed Wikipedia article.

The locator and builder only see ``Heading`` and ``Table`` objects; everything
BeautifulSoup-specific (MediaWiki heading wrappers, ``<br>`` handling, sibling
walking) stays in this module.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional

from bs4 import BeautifulSoup, Comment, Tag

HEADING_TAGS = ("h2", "h3", "h4", "h5", "h6")
HEADING_WRAPPER_CLASS = "mw-heading"
DATA_TABLE_CLASS = "wikitable"
PROXIMITY_HOPS = 5

_INLINE_SPACE_RE = re.compile(r"[^\S\n]+")


def _heading_tag(node: Tag) -> Optional[Tag]:
    """The ``hN`` element a block node stands for, if it is a heading block."""
    if node.name in HEADING_TAGS:
        return node
    if node.name == "div" and HEADING_WRAPPER_CLASS in (node.get("class") or []):
        return node.find(HEADING_TAGS)
    return None


def _block_node(heading: Tag) -> Tag:
    parent = heading.parent
    if isinstance(parent, Tag) and parent.name == "div" and HEADING_WRAPPER_CLASS in (parent.get("class") or []):
        return parent
    return heading


def _next_element(node: Tag) -> Optional[Tag]:
    sibling = node.find_next_sibling()
    return sibling if isinstance(sibling, Tag) else None


def _previous_element(node: Tag) -> Optional[Tag]:
    sibling = node.find_previous_sibling()
    return sibling if isinstance(sibling, Tag) else None


def cell_text(cell: Tag) -> str:
    """Plain text of a table cell: one line per ``<br>``/list item, spaces collapsed."""
    parts: List[str] = []
    for piece in cell.descendants:
        if isinstance(piece, Tag):
            if piece.name in ("br", "li", "p"):
                parts.append("\n")
            continue
        if isinstance(piece, Comment) or piece.parent.name in ("style", "script"):
            continue
        parts.append(str(piece))
    lines = (_INLINE_SPACE_RE.sub(" ", line).strip() for line in "".join(parts).splitlines())
    return "\n".join(line for line in lines if line)


def is_data_table(node: Tag) -> bool:
    return node.name == "table" and DATA_TABLE_CLASS in (node.get("class") or [])


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    node: Tag

    @classmethod
    def from_tag(cls, tag: Tag) -> "Heading":
        return cls(level=int(tag.name[1]), text=tag.get_text(" ", strip=True), node=_block_node(tag))

    def contains(self, needle: str) -> bool:
        return needle in self.text.lower()

    def next_sibling(self) -> Optional[Tag]:
        return _next_element(self.node)

    def section_nodes(self) -> Iterator[Tag]:
        """Block elements following the heading, up to the next heading of any level."""
        node = self.next_sibling()
        while node is not None and _heading_tag(node) is None:
            yield node
            node = _next_element(node)


@dataclass(frozen=True, eq=False)
class Table:
    node: Tag

    @property
    def caption(self) -> Optional[str]:
        caption = self.node.find("caption", recursive=False)
        if caption is None:
            return None
        return caption.get_text(" ", strip=True)

    @property
    def rows(self) -> List[List[str]]:
        """Cell texts of every ``<tr>``; only ``<td>`` cells count as data cells."""
        return [
            [cell_text(td) for td in tr.find_all("td", recursive=False)]
            for tr in self.node.find_all("tr")
            if tr.find_parent("table") is self.node
        ]

    def preceding_heading(self, max_hops: int = PROXIMITY_HOPS) -> Optional[Heading]:
        node = _previous_element(self.node)
        hops = 0
        while node is not None and hops < max_hops:
            tag = _heading_tag(node)
            if tag is not None:
                return Heading.from_tag(tag)
            node = _previous_element(node)
            hops += 1
        return None


class ArticleDocument:
    """Parsed article HTML. Never raises for unexpected or empty markup."""

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    @classmethod
    def from_html(cls, html: Optional[str]) -> "ArticleDocument":
        return cls(BeautifulSoup(html or "", "html.parser"))

    def headings(self) -> List[Heading]:
        return [Heading.from_tag(tag) for tag in self.soup.find_all(HEADING_TAGS)]

    def tables(self) -> List[Table]:
        return [Table(node) for node in self.soup.find_all("table", class_=DATA_TABLE_CLASS)]

    def tables_in(self, nodes) -> List[Table]:
        """Data tables among (or nested inside) the given block nodes, in order."""
        found: List[Table] = []
        for node in nodes:
            if is_data_table(node):
                found.append(Table(node))
                continue
            found.extend(Table(inner) for inner in node.find_all("table", class_=DATA_TABLE_CLASS))
        return found
