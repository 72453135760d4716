"""
Runtime configuration read from environment variables.

Blank or malformed values fall back to the defaults so that a half-configured
deployment still starts with safe settings.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .fetcher import (
    DEFAULT_PROXIES,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    MIN_RESPONSE_LENGTH,
    PageFetcher,
    ProxyEndpoint,
    proxy_from_prefix,
)
from .row_classifier import BoundaryPolicy, alphabetical_reset, never_reset

DEFAULT_EXPLICIT_ORIGINS: Sequence[str] = [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]

# Hosted frontends on Vercel may call the API.
DEFAULT_REGEX_ORIGINS: Sequence[str] = [r"https://(.+\.)?vercel\.app"]

DEFAULT_RATE_LIMIT_PER_MINUTE = 60
TRUTHY = {"1", "true", "yes", "y", "on"}
FALSY = {"0", "false", "no", "n", "off"}


def _split_env_list(raw_value: str | None) -> List[str]:
    if raw_value is None:
        return []
    return [entry.strip() for entry in raw_value.split(",") if entry.strip()]


def _env_list(name: str, default: Sequence[str]) -> List[str]:
    values = _split_env_list(os.environ.get(name))
    return values or list(default)


def _env_number(name: str, default, cast=int):
    raw = os.environ.get(name)
    try:
        value = cast(raw) if raw and raw.strip() else default
        if value <= 0:
            raise ValueError
    except (TypeError, ValueError):
        value = default
    return value


def _env_flag(name: str, default: bool) -> bool:
    raw = (os.environ.get(name) or "").strip().lower()
    if raw in TRUTHY:
        return True
    if raw in FALSY:
        return False
    return default


def get_cors_settings() -> Tuple[List[str], List[str]]:
    """
    Explicit and regex origins allowed to call the API.

    * CORS_ALLOW_ORIGINS overrides the explicit list (comma-separated).
    * CORS_ALLOW_ORIGIN_REGEXES overrides the regex patterns (comma-separated).
    """
    explicit = _env_list("CORS_ALLOW_ORIGINS", DEFAULT_EXPLICIT_ORIGINS)
    regexes = _env_list("CORS_ALLOW_ORIGIN_REGEXES", DEFAULT_REGEX_ORIGINS)
    # '*' belongs in the explicit list, never in a regex.
    regexes = [pattern for pattern in regexes if pattern != "*"]
    return explicit, regexes


def combine_regex_patterns(patterns: Sequence[str]) -> str | None:
    """FastAPI's CORSMiddleware takes a single regex; join the patterns into one."""
    if not patterns:
        return None
    return "|".join(f"(?:{pattern})" for pattern in patterns)


@dataclass(frozen=True)
class Settings:
    proxies: Tuple[ProxyEndpoint, ...] = DEFAULT_PROXIES
    timeout: float = DEFAULT_TIMEOUT
    min_response_length: int = MIN_RESPONSE_LENGTH
    user_agent: str = DEFAULT_USER_AGENT
    alphabetical_reset: bool = True
    cors_origins: Tuple[str, ...] = tuple(DEFAULT_EXPLICIT_ORIGINS)
    cors_origin_regexes: Tuple[str, ...] = tuple(DEFAULT_REGEX_ORIGINS)
    rate_limit_per_minute: int = DEFAULT_RATE_LIMIT_PER_MINUTE
    proxy_allowed_hosts: Tuple[str, ...] = field(default=("wikipedia.org",))

    @classmethod
    def from_env(cls) -> "Settings":
        prefixes = _split_env_list(os.environ.get("DESTCOMPARE_PROXIES"))
        proxies = tuple(proxy_from_prefix(prefix) for prefix in prefixes) or DEFAULT_PROXIES
        explicit, regexes = get_cors_settings()
        return cls(
            proxies=proxies,
            timeout=_env_number("DESTCOMPARE_TIMEOUT", DEFAULT_TIMEOUT, float),
            min_response_length=_env_number("DESTCOMPARE_MIN_RESPONSE_LENGTH", MIN_RESPONSE_LENGTH),
            user_agent=(os.environ.get("DESTCOMPARE_USER_AGENT") or "").strip() or DEFAULT_USER_AGENT,
            alphabetical_reset=_env_flag("DESTCOMPARE_ALPHABETICAL_RESET", True),
            cors_origins=tuple(explicit),
            cors_origin_regexes=tuple(regexes),
            rate_limit_per_minute=_env_number("RATE_LIMIT_PER_MINUTE", DEFAULT_RATE_LIMIT_PER_MINUTE),
            proxy_allowed_hosts=tuple(_env_list("PROXY_ALLOWED_HOSTS", ["wikipedia.org"])),
        )

    @property
    def boundary(self) -> BoundaryPolicy:
        return alphabetical_reset if self.alphabetical_reset else never_reset

    def page_fetcher(self) -> PageFetcher:
        return PageFetcher(
            proxies=self.proxies,
            timeout=self.timeout,
            min_length=self.min_response_length,
            user_agent=self.user_agent,
        )
