"""Resolve an airport code to its English Wikipedia article."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)

SEARCH_API_URL = "https://en.wikipedia.org/w/api.php"
ARTICLE_BASE_URL = "https://en.wikipedia.org/wiki/"


class ArticleLookupError(Exception):
    """Raised when the search API cannot be queried."""


def article_url(title: str) -> str:
    return ARTICLE_BASE_URL + quote(title.strip().replace(" ", "_"), safe="_(),'")


def resolve_article_url(
    code: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: float = 10,
    user_agent: Optional[str] = None,
) -> str:
    """
    Return the article URL of the best search hit for ``airport <code>``.

    Without any hit the code itself is used as the article title, which
    Wikipedia redirects for most IATA codes.
    """
    code = code.strip().upper()
    params = {
        "action": "query",
        "list": "search",
        "srsearch": f"airport {code}",
        "format": "json",
    }
    headers = {"User-Agent": user_agent} if user_agent else None
    http = session or requests
    try:
        response = http.get(SEARCH_API_URL, params=params, headers=headers, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        raise ArticleLookupError(f"Failed to search Wikipedia for {code}: {exc}") from exc

    results = ((payload or {}).get("query") or {}).get("search") or []
    if not results or not results[0].get("title"):
        logger.warning("No Wikipedia search result, using code as title", extra={"airport": code})
        return article_url(code)

    title = results[0]["title"]
    logger.info("Found Wikipedia page %s", title, extra={"airport": code})
    return article_url(title)
