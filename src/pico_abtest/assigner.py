"""Sticky version assignment.

``VersionAssigner`` reuses a persisted version when it is still one of the
scope's versions, otherwise it rolls a weighted random version and
persists it.  Once written, a version never changes for that cookie while
it remains a valid option.
"""

from datetime import timedelta
from typing import Optional

from pico_ioc import EventBus

from .events import VersionAssignedEvent
from .interfaces import CookieHandler, RandomExtractor
from .logging import get_logger
from .weights import ThresholdTable, pick_version

logger = get_logger(__name__)


class VersionAssigner:
    def __init__(
        self,
        cookie_handler: CookieHandler,
        random_extractor: RandomExtractor,
        event_bus: Optional[EventBus] = None,
    ):
        self.cookie_handler = cookie_handler
        self.random_extractor = random_extractor
        self.event_bus = event_bus

    def assign(
        self,
        scope: str,
        table: ThresholdTable,
        cookie_name: str,
        domain: Optional[str] = None,
        expiration: Optional[timedelta] = None,
    ) -> str:
        """Resolve the version a visitor sees for *scope*.

        Args:
            scope: Test scope, used for logging and events.
            table: Threshold table from ``process_weights``.
            cookie_name: Persistence key.
            domain: Cookie domain passed through on write.
            expiration: Cookie lifetime passed through on write.

        Returns:
            The persisted version when valid, otherwise a freshly rolled one.
        """
        persisted = self.cookie_handler.get(cookie_name)
        if persisted and any(version == persisted for _, version in table):
            logger.debug("Scope <%s>: reusing persisted version <%s>", scope, persisted, extra={"scope": scope})
            return persisted

        draw = self.random_extractor.next()
        chosen = pick_version(table, draw)
        self.cookie_handler.set(cookie_name, chosen, domain, expiration)
        logger.info(
            "Scope <%s>: assigned version <%s> (draw=%.2f)", scope, chosen, draw, extra={"scope": scope}
        )

        if self.event_bus:
            self.event_bus.publish_sync(VersionAssignedEvent(scope=scope, version=chosen, cookie_name=cookie_name))
        return chosen
