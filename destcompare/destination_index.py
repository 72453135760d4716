"""Per-airline destination sets extracted from one airport article."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple

from .document import ArticleDocument, Table
from .row_classifier import BoundaryPolicy, RowVerdict, alphabetical_reset, classify_row
from .table_locator import locate_passenger_tables
from .text_cleaner import clean_destinations

logger = logging.getLogger(__name__)

AGGREGATE_KEY = "__ALL__"

DestinationSet = FrozenSet[str]
RowContribution = Tuple[str, Tuple[str, ...]]


class AirlineDestinationIndex(Mapping[str, DestinationSet]):
    """Read-only mapping of airline name to destinations, plus the aggregate key."""

    def __init__(self, entries: Optional[Mapping[str, Iterable[str]]] = None):
        frozen = {airline: frozenset(dests) for airline, dests in (entries or {}).items()}
        self._entries = MappingProxyType(frozen)

    @classmethod
    def from_airlines(cls, airlines: Mapping[str, Iterable[str]]) -> "AirlineDestinationIndex":
        """Build an index from per-airline sets, deriving the aggregate entry."""
        entries: Dict[str, FrozenSet[str]] = {
            airline: frozenset(dests) for airline, dests in airlines.items() if airline != AGGREGATE_KEY
        }
        everything = frozenset().union(*entries.values()) if entries else frozenset()
        if everything:
            entries[AGGREGATE_KEY] = everything
        return cls(entries)

    def __getitem__(self, airline: str) -> DestinationSet:
        return self._entries[airline]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def airlines(self) -> List[str]:
        return [airline for airline in self._entries if airline != AGGREGATE_KEY]

    @property
    def all_destinations(self) -> DestinationSet:
        return self._entries.get(AGGREGATE_KEY, frozenset())

    def __repr__(self) -> str:
        return f"AirlineDestinationIndex(airlines={len(self.airlines)}, destinations={len(self.all_destinations)})"


def scan_table(table: Table, boundary: BoundaryPolicy = alphabetical_reset) -> List[RowContribution]:
    """Airline/destination pairs of one table, stopping at an alphabetical reset."""
    contributions: List[RowContribution] = []
    previous_letter = None
    for index, cells in enumerate(table.rows):
        decision = classify_row(cells, index, previous_letter, boundary)
        if decision.verdict is RowVerdict.STOP:
            logger.debug("Stopping table at row %d (%s): %s", index, decision.airline, decision.reason)
            break
        if not decision.accepted:
            continue
        previous_letter = decision.letter
        destinations = clean_destinations(cells[1])
        if destinations:
            contributions.append((decision.airline, destinations))
            logger.debug("Row %d: %s -> %s", index, decision.airline, ", ".join(destinations))
    return contributions


def fold_contributions(
    airlines: Mapping[str, FrozenSet[str]], contributions: Iterable[RowContribution]
) -> Dict[str, FrozenSet[str]]:
    """Return a new airline map with the contributions merged in."""
    merged = dict(airlines)
    for airline, destinations in contributions:
        merged[airline] = merged.get(airline, frozenset()) | frozenset(destinations)
    return merged


def build_destination_index(
    html: Optional[str],
    *,
    strategies: Optional[Iterable] = None,
    boundary: BoundaryPolicy = alphabetical_reset,
) -> AirlineDestinationIndex:
    """
    Extract the passenger destinations of one article.

    Never raises for odd markup: no qualifying tables (or no valid rows) gives
    an empty index.
    """
    document = ArticleDocument.from_html(html)
    tables = locate_passenger_tables(document, strategies)
    airlines: Dict[str, FrozenSet[str]] = {}
    for table in tables:
        airlines = fold_contributions(airlines, scan_table(table, boundary))

    index = AirlineDestinationIndex.from_airlines(airlines)
    if index.all_destinations:
        logger.info(
            "Extracted %d destinations for %d airlines from %d tables",
            len(index.all_destinations),
            len(index.airlines),
            len(tables),
        )
    else:
        logger.warning("No passenger destination data extracted from HTML (%d candidate tables)", len(tables))
    return index
