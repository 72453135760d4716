"""Find the tables of an article that list passenger destinations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .document import ArticleDocument, Heading, Table

logger = logging.getLogger(__name__)

SECTION_KEYWORD = "airlines and destinations"
PASSENGER_KEYWORD = "passenger"
EXCLUDED_KEYWORDS = ("cargo", "freight")


class HeadingScopeStrategy:
    """Tables inside the "Passenger" subsection of "Airlines and destinations"."""

    name = "heading-scope"

    def _anchor(self, headings: Sequence[Heading]) -> Optional[int]:
        for position, heading in enumerate(headings):
            if heading.contains(SECTION_KEYWORD):
                return position
        return None

    def passenger_heading(self, document: ArticleDocument) -> Optional[Heading]:
        headings = document.headings()
        anchor_at = self._anchor(headings)
        if anchor_at is None:
            return None
        anchor = headings[anchor_at]
        for heading in headings[anchor_at + 1 :]:
            if heading.level <= anchor.level:
                return None
            if any(heading.contains(word) for word in EXCLUDED_KEYWORDS):
                return None
            if heading.contains(PASSENGER_KEYWORD):
                return heading
        return None

    def select(self, document: ArticleDocument) -> List[Table]:
        heading = self.passenger_heading(document)
        if heading is None:
            return []
        return document.tables_in(heading.section_nodes())


class CaptionProximityStrategy:
    """Tables captioned "passenger", or uncaptioned tables right under such a heading."""

    name = "caption-proximity"

    def __init__(self, max_hops: Optional[int] = None):
        self.max_hops = max_hops

    def accepts(self, table: Table) -> bool:
        caption = table.caption
        if caption:
            return PASSENGER_KEYWORD in caption.lower()
        heading = table.preceding_heading() if self.max_hops is None else table.preceding_heading(self.max_hops)
        return heading is not None and heading.contains(PASSENGER_KEYWORD)

    def select(self, document: ArticleDocument) -> List[Table]:
        return [table for table in document.tables() if self.accepts(table)]


DEFAULT_STRATEGIES: Tuple[object, ...] = (HeadingScopeStrategy(), CaptionProximityStrategy())


@dataclass(frozen=True)
class TableMatch:
    table: Table
    strategies: Tuple[str, ...]


def explain_tables(document: ArticleDocument, strategies: Optional[Iterable] = None) -> List[TableMatch]:
    """Every accepted table, in document order, with the strategies that accepted it."""
    strategies = DEFAULT_STRATEGIES if strategies is None else tuple(strategies)
    accepted = {}
    for strategy in strategies:
        for table in strategy.select(document):
            table_id = id(table.node)
            if table_id not in accepted:
                accepted[table_id] = (table, [])
            accepted[table_id][1].append(strategy.name)

    order = {id(table.node): position for position, table in enumerate(document.soup.find_all("table"))}
    matches = [TableMatch(table, tuple(names)) for table, names in accepted.values()]
    matches.sort(key=lambda match: order.get(id(match.table.node), len(order)))
    for match in matches:
        logger.debug("Accepted table (caption=%r) via %s", match.table.caption, ", ".join(match.strategies))
    return matches


def locate_passenger_tables(document: ArticleDocument, strategies: Optional[Iterable] = None) -> List[Table]:
    return [match.table for match in explain_tables(document, strategies)]
