"""Orchestration of a two-airport comparison for the CLI and web entrypoints."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .destination_index import AirlineDestinationIndex, build_destination_index
from .fetcher import FetchError, PageFetcher
from .merge import ComparisonRow, merge_indices
from .settings import Settings
from .wikipedia import ArticleLookupError, resolve_article_url

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No passenger destination data found for either airport."
NO_ROWS_MESSAGE = "No comparable airline data found between the two airports."


class ComparisonError(Exception):
    """Raised when a comparison request cannot be satisfied."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class ComparisonRequest(BaseModel):
    airport_a: str = Field(..., min_length=3, max_length=4, description="IATA/ICAO code of the first airport.")
    airport_b: str = Field(..., min_length=3, max_length=4, description="IATA/ICAO code of the second airport.")

    @field_validator("airport_a", "airport_b", mode="before")
    @classmethod
    def _normalize_code(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def _codes_differ(self) -> "ComparisonRequest":
        if self.airport_a == self.airport_b:
            raise ValueError("Please enter two different airport codes.")
        return self


def validation_detail(exc: ValidationError) -> List[Dict[str, Any]]:
    return exc.errors(include_url=False, include_context=False)


def validation_message(exc: ValidationError) -> str:
    return "; ".join(error["msg"] for error in validation_detail(exc))


def serialize_result(code_a: str, code_b: str, rows: List[ComparisonRow], sources: Optional[Dict[str, str]] = None):
    return {
        "airport_a": code_a,
        "airport_b": code_b,
        "sources": sources or {},
        "rows": [row.to_dict() for row in rows],
    }


def _merge_or_raise(index_a: AirlineDestinationIndex, index_b: AirlineDestinationIndex) -> List[ComparisonRow]:
    if len(index_a) == 0 and len(index_b) == 0:
        raise ComparisonError(404, NO_DATA_MESSAGE)
    rows = merge_indices(index_a, index_b)
    if not rows:
        raise ComparisonError(404, NO_ROWS_MESSAGE)
    return rows


def compare_documents(
    html_a: str,
    html_b: str,
    code_a: str = "A",
    code_b: str = "B",
    settings: Optional[Settings] = None,
) -> Dict[str, Any]:
    """Compare two already-retrieved articles."""
    settings = settings or Settings()
    index_a = build_destination_index(html_a, boundary=settings.boundary)
    index_b = build_destination_index(html_b, boundary=settings.boundary)
    return serialize_result(code_a, code_b, _merge_or_raise(index_a, index_b))


def _airport_pipeline(
    code: str,
    resolver: Callable[[str], str],
    fetcher: PageFetcher,
    build: Callable[[str], AirlineDestinationIndex],
) -> Tuple[str, AirlineDestinationIndex]:
    try:
        url = resolver(code)
    except ArticleLookupError as exc:
        raise ComparisonError(502, str(exc)) from exc

    logger.info("Fetching destinations from %s", url, extra={"airport": code, "url": url})
    try:
        index = fetcher.fetch_destination_index(url, build=build)
    except FetchError as exc:
        raise ComparisonError(502, f"{code}: {exc}") from exc
    return url, index


def compare_airports(
    payload: ComparisonRequest,
    settings: Optional[Settings] = None,
    *,
    resolver: Optional[Callable[[str], str]] = None,
    fetcher: Optional[PageFetcher] = None,
) -> Dict[str, Any]:
    """Resolve, fetch and parse both airports concurrently, then diff them."""
    settings = settings or Settings.from_env()
    # requests sessions are not shared between threads; each pipeline gets its own fetcher.
    fetchers = (fetcher, fetcher) if fetcher is not None else (settings.page_fetcher(), settings.page_fetcher())
    if resolver is None:
        resolver = partial(resolve_article_url, timeout=settings.timeout, user_agent=settings.user_agent)
    build = partial(build_destination_index, boundary=settings.boundary)

    with ThreadPoolExecutor(max_workers=2) as pool:
        future_a = pool.submit(_airport_pipeline, payload.airport_a, resolver, fetchers[0], build)
        future_b = pool.submit(_airport_pipeline, payload.airport_b, resolver, fetchers[1], build)
        url_a, index_a = future_a.result()
        url_b, index_b = future_b.result()

    logger.info("Parsed destination maps sizes: %d, %d", len(index_a), len(index_b))
    rows = _merge_or_raise(index_a, index_b)
    sources = {payload.airport_a: url_a, payload.airport_b: url_b}
    return serialize_result(payload.airport_a, payload.airport_b, rows, sources)
