"""Fetch article HTML through a prioritised chain of proxies."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple
from urllib.parse import quote

import requests

from .destination_index import AirlineDestinationIndex, build_destination_index

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15
MIN_RESPONSE_LENGTH = 100
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; AirportDestComparator/1.0)"


@dataclass(frozen=True)
class ProxyEndpoint:
    """A URL prefix the encoded target URL is appended to; an empty prefix is a direct request."""

    name: str
    prefix: str = ""
    payload: str = "text"
    json_field: str = "contents"

    def request_url(self, target: str) -> str:
        if not self.prefix:
            return target
        return self.prefix + quote(target, safe="")

    def extract(self, response: requests.Response) -> str:
        if self.payload == "json":
            body = response.json()
            if not isinstance(body, dict):
                raise ValueError(f"Unexpected JSON payload from proxy: {self.name}")
            return body.get(self.json_field) or ""
        return response.text or ""


DIRECT = ProxyEndpoint("direct")

DEFAULT_PROXIES: Tuple[ProxyEndpoint, ...] = (
    DIRECT,
    ProxyEndpoint("vercel", "https://common-airport-destinations.vercel.app/api/proxy?url="),
    ProxyEndpoint("allorigins", "https://api.allorigins.win/get?url=", payload="json"),
    ProxyEndpoint("corsproxy", "https://corsproxy.io/?"),
    ProxyEndpoint("codetabs", "https://api.codetabs.com/v1/proxy?quest="),
    ProxyEndpoint("thingproxy", "https://thingproxy.freeboard.io/fetch/"),
)


def proxy_from_prefix(prefix: str) -> ProxyEndpoint:
    """Build an endpoint from a configured prefix (``direct`` means no proxy)."""
    prefix = prefix.strip()
    if not prefix or prefix.lower() == "direct":
        return DIRECT
    for known in DEFAULT_PROXIES:
        if known.prefix == prefix:
            return known
    payload = "json" if "allorigins" in prefix else "text"
    return ProxyEndpoint(prefix, prefix, payload=payload)


@dataclass
class FetchAttempt:
    proxy: str
    error: str


class FetchError(Exception):
    """Raised when every proxy in the chain failed."""

    def __init__(self, message: str, attempts: Optional[List[FetchAttempt]] = None):
        super().__init__(message)
        self.attempts = attempts or []


@dataclass
class PageFetcher:
    proxies: Sequence[ProxyEndpoint] = DEFAULT_PROXIES
    timeout: float = DEFAULT_TIMEOUT
    min_length: int = MIN_RESPONSE_LENGTH
    user_agent: str = DEFAULT_USER_AGENT
    session: requests.Session = field(default_factory=requests.Session)

    def fetch_via(self, proxy: ProxyEndpoint, url: str) -> str:
        """Fetch ``url`` through one proxy, raising on any unusable response."""
        headers = {"User-Agent": self.user_agent, "Accept": "text/html"}
        response = self.session.get(proxy.request_url(url), headers=headers, timeout=self.timeout)
        if not response.ok:
            raise RuntimeError(f"HTTP {response.status_code} at proxy: {proxy.name}")
        html = proxy.extract(response)
        if not html or len(html) < self.min_length:
            raise RuntimeError(f"Empty or invalid response from proxy: {proxy.name}")
        return html

    def first_successful(self, url: str, accept: Callable[[str, ProxyEndpoint], object]):
        """Try proxies in order; ``accept`` turns HTML into a result or raises to move on."""
        attempts: List[FetchAttempt] = []
        last_exc: Optional[Exception] = None
        for proxy in self.proxies:
            logger.info("Fetching page", extra={"proxy": proxy.name, "url": url})
            try:
                return accept(self.fetch_via(proxy, url), proxy)
            except (requests.RequestException, ValueError, RuntimeError) as exc:
                logger.warning("Proxy failed: %s", exc, extra={"proxy": proxy.name, "url": url})
                attempts.append(FetchAttempt(proxy.name, str(exc)))
                last_exc = exc

        last_message = str(last_exc) if last_exc is not None else "Unknown error"
        raise FetchError(f"All proxies failed. Last error: {last_message}", attempts) from last_exc

    def fetch_html(self, url: str) -> str:
        return self.first_successful(url, lambda html, proxy: html)

    def fetch_destination_index(self, url: str, build=build_destination_index) -> AirlineDestinationIndex:
        """
        Fetch and parse, moving on to the next proxy when a page yields no destinations.

        A page that was fetched but holds no passenger data is not a fetch
        failure: once the chain is exhausted the last empty index is returned.
        """
        empty: List[AirlineDestinationIndex] = []

        def parse(html: str, proxy: ProxyEndpoint) -> AirlineDestinationIndex:
            index = build(html)
            if len(index) == 0:
                empty.append(index)
                raise RuntimeError(f"No destination data found in page via {proxy.name}")
            return index

        try:
            return self.first_successful(url, parse)
        except FetchError:
            if not empty:
                raise
            logger.warning("Page fetched but holds no destination data", extra={"url": url})
            return empty[-1]


def fetch_passthrough(url: str, *, timeout: float = DEFAULT_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT) -> Tuple[str, str]:
    """Body and content type of ``url``, as served by the page proxy endpoint."""
    response = requests.get(url, headers={"User-Agent": user_agent, "Accept": "text/html"}, timeout=timeout)
    return response.text, response.headers.get("content-type") or "text/html"
