"""Protocol interfaces for the collaborators the assignment engine relies on.

The engine never touches cookies, user agents or random generators
directly.  It talks to these ``typing.Protocol`` ports, so any conforming
implementation can be plugged in without explicit inheritance.  Built-in
implementations live in :mod:`pico_abtest.adapters`.
"""

from datetime import timedelta
from typing import Optional, Protocol


class CookieHandler(Protocol):
    """Persistence port for the version chosen for each scope.

    Only last-write-wins semantics per name are expected.
    """

    def get(self, name: str) -> Optional[str]:
        """Read a persisted value.

        Args:
            name: Cookie name, ``"<namespace>-<scope>"``.

        Returns:
            The stored string, or ``None`` (or an empty string) when the
            visitor has not been assigned yet.
        """
        ...

    def set(
        self,
        name: str,
        value: str,
        domain: Optional[str] = None,
        expiration: Optional[timedelta] = None,
    ) -> None:
        """Persist a value.

        Args:
            name: Cookie name, ``"<namespace>-<scope>"``.
            value: The chosen version name.
            domain: Optional cookie domain.
            expiration: Optional lifetime; ``None`` means a session cookie.
        """
        ...


class CrawlerDetector(Protocol):
    """Tells whether the current visitor is a non-interactive crawler.

    Evaluated once, before the registry is built.
    """

    def is_crawler(self) -> bool:
        ...


class RandomExtractor(Protocol):
    """Uniform random source used for first-time assignments."""

    def next(self) -> float:
        """Return a uniformly distributed number in ``[0, 100)``."""
        ...
