"""Built-in implementations of the collaborator protocols.

These cover the common cases: an in-process cookie store for tests and
single-user apps, a request-bound handler for server-rendered pages, a
User-Agent based crawler detector and a uniform random extractor.
"""

import random
import re
import time
from dataclasses import dataclass
from datetime import timedelta
from http.cookies import SimpleCookie
from typing import Dict, List, Optional

from .logging import get_logger

logger = get_logger(__name__)

CRAWLER_PATTERN = re.compile(
    r"bot|crawl|spider|slurp|archiver|facebookexternalhit|embedly|quora link preview"
    r"|outbrain|pinterest|vkshare|w3c_validator|lighthouse|headlesschrome|bingpreview",
    re.IGNORECASE,
)


@dataclass
class StoredCookie:
    value: str
    domain: Optional[str] = None
    expires_at: Optional[float] = None


class InMemoryCookieHandler:
    """Dictionary-backed ``CookieHandler``.

    Expired entries read as absent.
    """

    def __init__(self):
        self.cookies: Dict[str, StoredCookie] = {}

    def get(self, name: str) -> Optional[str]:
        cookie = self.cookies.get(name)
        if cookie is None:
            return None
        if cookie.expires_at is not None and cookie.expires_at <= time.time():
            del self.cookies[name]
            return None
        return cookie.value

    def set(
        self,
        name: str,
        value: str,
        domain: Optional[str] = None,
        expiration: Optional[timedelta] = None,
    ) -> None:
        expires_at = time.time() + expiration.total_seconds() if expiration is not None else None
        self.cookies[name] = StoredCookie(value=value, domain=domain, expires_at=expires_at)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return re.sub(r"\\(.)", r"\1", value[1:-1])
    return value


def parse_cookie_header(cookie_header: Optional[str]) -> Dict[str, str]:
    """Parse a request ``Cookie`` header pair by pair.

    Values that are not valid RFC 6265 cookie values (JSON, unquoted
    spaces) are kept as raw strings and never hide the pairs after them.
    Pairs without ``=`` are skipped.  When a name repeats, the first value
    wins, as browsers send the most specific cookie first.
    """
    cookies: Dict[str, str] = {}
    for pair in (cookie_header or "").split(";"):
        name, sep, value = pair.partition("=")
        name = name.strip()
        if not sep or not name or name in cookies:
            continue
        cookies[name] = _unquote(value.strip())
    return cookies


class RequestCookieHandler:
    """``CookieHandler`` bound to a single HTTP request.

    Reads the incoming ``Cookie`` header and collects the cookies to send
    back.  Values written during the request shadow the incoming ones.

    Example:
        >>> handler = RequestCookieHandler(request.headers.get("Cookie", ""))
        >>> registry = AbTestRegistry(configs, False, handler, UniformRandomExtractor())
        >>> for header in handler.set_cookie_headers():
        ...     response.headers.add("Set-Cookie", header)
    """

    def __init__(self, cookie_header: str = ""):
        self._incoming = parse_cookie_header(cookie_header)
        self._outgoing = SimpleCookie()

    def get(self, name: str) -> Optional[str]:
        if name in self._outgoing:
            return self._outgoing[name].value
        return self._incoming.get(name)

    def set(
        self,
        name: str,
        value: str,
        domain: Optional[str] = None,
        expiration: Optional[timedelta] = None,
    ) -> None:
        self._outgoing[name] = value
        morsel = self._outgoing[name]
        morsel["path"] = "/"
        if domain:
            morsel["domain"] = domain
        if expiration is not None:
            morsel["max-age"] = int(expiration.total_seconds())

    def set_cookie_headers(self) -> List[str]:
        """Return one ``Set-Cookie`` header value per written cookie."""
        return [morsel.OutputString() for morsel in self._outgoing.values()]


class NoCrawlerDetector:
    def is_crawler(self) -> bool:
        return False


class UserAgentCrawlerDetector:
    def __init__(self, user_agent: Optional[str], pattern: re.Pattern = CRAWLER_PATTERN):
        self.user_agent = user_agent or ""
        self.pattern = pattern

    def is_crawler(self) -> bool:
        detected = bool(self.pattern.search(self.user_agent))
        if detected:
            logger.debug("Crawler detected from user agent %r", self.user_agent)
        return detected


class UniformRandomExtractor:
    """Draws from ``[0, 100)`` with :mod:`random`.

    Pass *seed* for reproducible sequences.
    """

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def next(self) -> float:
        return self._random.random() * 100
