"""Turn the free text of a destinations cell into clean destination names."""

from __future__ import annotations

import re
from typing import Iterable, Tuple

STOP_WORDS = frozenset(
    {
        "and",
        "or",
        "also",
        "via",
        "seasonal",
        "charter",
        "cargo",
        "freight",
        "terminated",
        "suspended",
    }
)

MIN_LENGTH = 3
MAX_LENGTH = 50

CITATION_RE = re.compile(r"\[\d+\]")
PARENTHETICAL_RE = re.compile(r"\([^)]+\)")
DASH_RE = re.compile(r"[–—]")
WHITESPACE_RUN_RE = re.compile(r"\s{2,}")
SEPARATOR_RE = re.compile(r"[\n,;·•]")
DIGIT_RUN_RE = re.compile(r"[0-9]{3,}")
CODE_LIKE_RE = re.compile(r"^\d{2,}[a-z]?$", re.IGNORECASE)


def normalize_cell_text(text: str) -> str:
    """Strip citations, asides and dash variants, then collapse whitespace."""
    if not text:
        return ""
    text = CITATION_RE.sub("", text)
    text = PARENTHETICAL_RE.sub("", text)
    text = DASH_RE.sub("-", text)
    text = WHITESPACE_RUN_RE.sub(" ", text)
    return text.strip()


def is_destination(fragment: str) -> bool:
    if not (MIN_LENGTH <= len(fragment) < MAX_LENGTH):
        return False
    if fragment.isdigit():
        return False
    if DIGIT_RUN_RE.search(fragment) or CODE_LIKE_RE.match(fragment):
        return False
    return fragment.lower() not in STOP_WORDS


def split_destinations(text: str) -> Iterable[str]:
    for fragment in SEPARATOR_RE.split(text):
        fragment = fragment.strip()
        if fragment:
            yield fragment


def clean_destinations(text: str) -> Tuple[str, ...]:
    """
    Return the destination names found in a raw destinations cell.

    Order follows first appearance; duplicates are dropped. An empty tuple is a
    valid result (the row simply contributes nothing).
    """
    normalized = normalize_cell_text(text or "")
    kept = (fragment for fragment in split_destinations(normalized) if is_destination(fragment))
    return tuple(dict.fromkeys(kept))
