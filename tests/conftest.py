import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_path():
    """Allow tests to import project modules without installation."""
    repo_root = Path(__file__).resolve().parent.parent
    repo_str = str(repo_root)
    if repo_str not in sys.path:
        sys.path.insert(0, repo_str)


_ensure_repo_root_on_path()


@pytest.fixture
def clean_env(monkeypatch):
    """Drop every environment variable the settings module reads."""
    for name in (
        "DESTCOMPARE_PROXIES",
        "DESTCOMPARE_TIMEOUT",
        "DESTCOMPARE_MIN_RESPONSE_LENGTH",
        "DESTCOMPARE_USER_AGENT",
        "DESTCOMPARE_ALPHABETICAL_RESET",
        "CORS_ALLOW_ORIGINS",
        "CORS_ALLOW_ORIGIN_REGEXES",
        "RATE_LIMIT_PER_MINUTE",
        "PROXY_ALLOWED_HOSTS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
