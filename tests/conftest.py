import pytest
from typing import Dict, List, Optional
from unittest.mock import MagicMock

from pico_abtest.config import AbTestConfig
from pico_abtest.interfaces import CookieHandler, RandomExtractor


class FakeCookieHandler:
    """Dict-backed cookie store that records every write."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(initial or {})
        self.writes: List[tuple] = []

    def get(self, name):
        return self.values.get(name)

    def set(self, name, value, domain=None, expiration=None):
        self.values[name] = value
        self.writes.append((name, value, domain, expiration))


class FixedRandom:
    """Returns the given draws in order, repeating the last one."""

    def __init__(self, *draws: float):
        self.draws = list(draws)
        self.calls = 0

    def next(self) -> float:
        index = min(self.calls, len(self.draws) - 1)
        self.calls += 1
        return self.draws[index]


class FixedCrawlerDetector:
    def __init__(self, crawler: bool):
        self.crawler = crawler

    def is_crawler(self) -> bool:
        return self.crawler


@pytest.fixture
def cookie_handler():
    """Create an empty FakeCookieHandler."""
    return FakeCookieHandler()


@pytest.fixture
def make_cookies():
    """Factory for FakeCookieHandler, optionally pre-populated."""
    return FakeCookieHandler


@pytest.fixture
def make_random():
    """Factory for FixedRandom with the given draws."""
    return FixedRandom


@pytest.fixture
def make_crawler_detector():
    """Factory for a CrawlerDetector with a fixed answer."""
    return FixedCrawlerDetector


@pytest.fixture
def mock_cookie_handler():
    """Create a mock CookieHandler with nothing persisted."""
    handler = MagicMock(spec=CookieHandler)
    handler.get.return_value = None
    return handler


@pytest.fixture
def mock_random():
    """Create a mock RandomExtractor drawing 30."""
    extractor = MagicMock(spec=RandomExtractor)
    extractor.next.return_value = 30.0
    return extractor


@pytest.fixture
def two_version_config():
    """Scope "hero" with two equally weighted versions."""
    return AbTestConfig(scope="hero", versions=("a", "b"))


@pytest.fixture
def weighted_config():
    """Scope "pricing" with three versions, two of them weighted."""
    return AbTestConfig(
        scope="pricing",
        versions=("a", "b", "c"),
        weights={"a": 20, "b": 30},
        domain="example.com",
        version_for_crawlers="c",
    )
