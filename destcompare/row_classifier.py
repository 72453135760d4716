"""Accept/reject decisions for the data rows of a destinations table."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

MIN_AIRLINE_LENGTH = 2

# (previous_letter, current_letter) -> True when the table should stop here.
BoundaryPolicy = Callable[[Optional[str], str], bool]


class RowVerdict(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    STOP = "stop"


@dataclass(frozen=True)
class RowDecision:
    verdict: RowVerdict
    airline: Optional[str] = None
    letter: Optional[str] = None
    reason: str = ""

    @property
    def accepted(self) -> bool:
        return self.verdict is RowVerdict.ACCEPT


def first_letter(airline: str) -> str:
    """Lower-cased first character of an airline name with accents folded."""
    decomposed = unicodedata.normalize("NFKD", airline[:1])
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base or airline[:1]).casefold()


def alphabetical_reset(previous_letter: Optional[str], letter: str) -> bool:
    """Airlines are listed A→Z; a smaller first letter means a new section began."""
    return previous_letter is not None and letter < previous_letter


def never_reset(previous_letter: Optional[str], letter: str) -> bool:
    return False


def _reject(reason: str) -> RowDecision:
    return RowDecision(RowVerdict.REJECT, reason=reason)


def classify_row(
    cells: Sequence[str],
    index: int,
    previous_letter: Optional[str] = None,
    boundary: BoundaryPolicy = alphabetical_reset,
) -> RowDecision:
    """
    Decide whether a table row is an airline/destinations row.

    ``previous_letter`` is the first letter of the last accepted airline in the
    same table (``None`` at the start of a table). A ``STOP`` verdict means the
    caller must discard this row and every later row of the table.
    """
    if index == 0:
        return _reject("header row")
    if len(cells) < 2:
        return _reject("fewer than two cells")

    airline = (cells[0] or "").strip()
    if len(airline) < MIN_AIRLINE_LENGTH:
        return _reject("airline name too short")
    if airline.isdigit():
        return _reject("numeric airline name")

    letter = first_letter(airline)
    if boundary(previous_letter, letter):
        return RowDecision(
            RowVerdict.STOP,
            airline=airline,
            letter=letter,
            reason=f"'{letter}' sorts before '{previous_letter}'",
        )
    return RowDecision(RowVerdict.ACCEPT, airline=airline, letter=letter)
