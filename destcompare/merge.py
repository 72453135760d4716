"""Diff two destination indices airline by airline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple

from .destination_index import AGGREGATE_KEY

AGGREGATE_LABEL = "All Airlines"


@dataclass(frozen=True)
class ComparisonRow:
    airline: str
    common: Tuple[str, ...]
    only_a: Tuple[str, ...]
    only_b: Tuple[str, ...]
    is_aggregate: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "airline": self.airline,
            "common": list(self.common),
            "only_a": list(self.only_a),
            "only_b": list(self.only_b),
        }


def _sort_key(row: ComparisonRow):
    return (not row.is_aggregate, row.airline.casefold(), row.airline)


def compare_sets(airline: str, dests_a, dests_b, *, is_aggregate: bool = False) -> ComparisonRow:
    dests_a = frozenset(dests_a)
    dests_b = frozenset(dests_b)
    return ComparisonRow(
        airline=airline,
        common=tuple(sorted(dests_a & dests_b)),
        only_a=tuple(sorted(dests_a - dests_b)),
        only_b=tuple(sorted(dests_b - dests_a)),
        is_aggregate=is_aggregate,
    )


def merge_indices(
    index_a: Mapping[str, frozenset],
    index_b: Mapping[str, frozenset],
    *,
    aggregate_label: str = AGGREGATE_LABEL,
) -> List[ComparisonRow]:
    """
    One row per airline present in either index.

    Rows whose three sets are all empty are dropped. The aggregate pseudo-airline
    is relabelled and always comes first; the rest follow by airline name,
    ignoring case.
    """
    airlines = list(dict.fromkeys([*index_a.keys(), *index_b.keys()]))
    rows = []
    for airline in airlines:
        is_aggregate = airline == AGGREGATE_KEY
        row = compare_sets(
            aggregate_label if is_aggregate else airline,
            index_a.get(airline, frozenset()),
            index_b.get(airline, frozenset()),
            is_aggregate=is_aggregate,
        )
        if row.common or row.only_a or row.only_b:
            rows.append(row)
    return sorted(rows, key=_sort_key)
