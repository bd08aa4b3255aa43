import pytest
from datetime import timedelta
from unittest.mock import patch

from pico_abtest.adapters import (
    InMemoryCookieHandler,
    NoCrawlerDetector,
    RequestCookieHandler,
    UniformRandomExtractor,
    UserAgentCrawlerDetector,
    parse_cookie_header,
)
from pico_abtest.config import AbTestConfig
from pico_abtest.registry import AbTestRegistry


class TestInMemoryCookieHandler:
    def test_get_missing_returns_none(self):
        assert InMemoryCookieHandler().get("missing") is None

    def test_set_and_get(self):
        handler = InMemoryCookieHandler()
        handler.set("ns-hero", "a", "example.com")
        assert handler.get("ns-hero") == "a"
        assert handler.cookies["ns-hero"].domain == "example.com"
        assert handler.cookies["ns-hero"].expires_at is None

    def test_last_write_wins(self):
        handler = InMemoryCookieHandler()
        handler.set("ns-hero", "a")
        handler.set("ns-hero", "b")
        assert handler.get("ns-hero") == "b"

    def test_expired_cookie_reads_as_absent(self):
        handler = InMemoryCookieHandler()
        with patch("pico_abtest.adapters.time.time", return_value=1000.0):
            handler.set("ns-hero", "a", expiration=timedelta(seconds=60))
        assert handler.cookies["ns-hero"].expires_at == 1060.0

        with patch("pico_abtest.adapters.time.time", return_value=1059.0):
            assert handler.get("ns-hero") == "a"
        with patch("pico_abtest.adapters.time.time", return_value=1060.0):
            assert handler.get("ns-hero") is None
        assert "ns-hero" not in handler.cookies


class TestRequestCookieHandler:
    def test_reads_incoming_header(self):
        handler = RequestCookieHandler("session=xyz; pico-abtest-hero=b")
        assert handler.get("pico-abtest-hero") == "b"
        assert handler.get("session") == "xyz"
        assert handler.get("missing") is None

    def test_empty_header(self):
        handler = RequestCookieHandler()
        assert handler.get("pico-abtest-hero") is None
        assert handler.set_cookie_headers() == []

    def test_written_value_shadows_incoming(self):
        handler = RequestCookieHandler("pico-abtest-hero=old")
        handler.set("pico-abtest-hero", "new")
        assert handler.get("pico-abtest-hero") == "new"

    def test_set_cookie_header_attributes(self):
        handler = RequestCookieHandler()
        handler.set("pico-abtest-hero", "b", domain="example.com", expiration=timedelta(days=1))
        headers = handler.set_cookie_headers()
        assert len(headers) == 1
        header = headers[0]
        assert header.startswith("pico-abtest-hero=b")
        assert "Domain=example.com" in header
        assert "Max-Age=86400" in header
        assert "Path=/" in header

    def test_session_cookie_has_no_max_age(self):
        handler = RequestCookieHandler()
        handler.set("pico-abtest-hero", "b")
        assert "Max-Age" not in handler.set_cookie_headers()[0]

    def test_registry_round_trip_over_http(self):
        config = AbTestConfig(scope="hero", versions=("a", "b"), expiration=timedelta(days=30))

        first = RequestCookieHandler("")
        registry = AbTestRegistry([config], False, first, UniformRandomExtractor(seed=7))
        version = registry.get_version("hero")
        header = first.set_cookie_headers()[0]
        cookie_pair = header.split(";")[0]

        second = RequestCookieHandler(cookie_pair)
        again = AbTestRegistry([config], False, second, UniformRandomExtractor(seed=99))
        assert again.get_version("hero") == version
        assert second.set_cookie_headers() == []

    def test_malformed_foreign_cookie_does_not_hide_later_pairs(self):
        handler = RequestCookieHandler('tracker={"id":"x y"}; pico-abtest-hero=video')
        assert handler.get("pico-abtest-hero") == "video"
        assert handler.get("tracker") == '{"id":"x y"}'

    def test_quoted_value_is_unquoted(self):
        handler = RequestCookieHandler('pico-abtest-hero="video"; note="a \\"b\\""')
        assert handler.get("pico-abtest-hero") == "video"
        assert handler.get("note") == 'a "b"'

    def test_first_value_wins_for_repeated_name(self):
        handler = RequestCookieHandler("pico-abtest-hero=video; pico-abtest-hero=classic")
        assert handler.get("pico-abtest-hero") == "video"

    def test_pairs_without_equals_are_skipped(self):
        handler = RequestCookieHandler("flag; ; =orphan; pico-abtest-hero=video")
        assert handler.get("flag") is None
        assert handler.get("") is None
        assert handler.get("pico-abtest-hero") == "video"

    def test_persisted_version_survives_malformed_neighbour(self, make_random):
        config = AbTestConfig(scope="hero", versions=("classic", "video"))
        handler = RequestCookieHandler("session=abc def; pico-abtest-hero=video")

        registry = AbTestRegistry([config], False, handler, make_random(10))

        assert registry.get_version("hero") == "video"
        assert handler.set_cookie_headers() == []


class TestParseCookieHeader:
    def test_none_and_empty(self):
        assert parse_cookie_header(None) == {}
        assert parse_cookie_header("") == {}

    def test_whitespace_around_pairs(self):
        assert parse_cookie_header("  a = 1 ;b=2;  ") == {"a": "1", "b": "2"}

    def test_value_may_contain_equals(self):
        assert parse_cookie_header("token=abc==; x=1") == {"token": "abc==", "x": "1"}

    def test_empty_value_is_kept(self):
        assert parse_cookie_header("pico-abtest-hero=") == {"pico-abtest-hero": ""}


class TestCrawlerDetectors:
    def test_no_crawler_detector(self):
        assert NoCrawlerDetector().is_crawler() is False

    @pytest.mark.parametrize("user_agent", [
        "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)",
        "Mozilla/5.0 (compatible; bingbot/2.0; +http://www.bing.com/bingbot.htm)",
        "Mozilla/5.0 (compatible; Yahoo! Slurp; http://help.yahoo.com/help/us/ysearch/slurp)",
        "facebookexternalhit/1.1 (+http://www.facebook.com/externalhit_uatext.php)",
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) HeadlessChrome/120.0 Safari/537.36",
    ])
    def test_detects_crawlers(self, user_agent):
        assert UserAgentCrawlerDetector(user_agent).is_crawler() is True

    @pytest.mark.parametrize("user_agent", [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0 Safari/537.36",
        "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1",
        "",
        None,
    ])
    def test_real_browsers_not_crawlers(self, user_agent):
        assert UserAgentCrawlerDetector(user_agent).is_crawler() is False


class TestUniformRandomExtractor:
    def test_values_in_range(self):
        extractor = UniformRandomExtractor()
        for _ in range(1000):
            value = extractor.next()
            assert 0 <= value < 100

    def test_seed_is_reproducible(self):
        a = UniformRandomExtractor(seed=42)
        b = UniformRandomExtractor(seed=42)
        assert [a.next() for _ in range(5)] == [b.next() for _ in range(5)]
