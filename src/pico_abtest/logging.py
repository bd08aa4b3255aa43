"""Scope-aware logging for pico-abtest.

Loggers live under the ``pico_abtest`` namespace.  Engine records about a
single test carry the test's scope in ``record.scope`` (passed through
``extra``), so a busy page with many tests can be traced, or muted, one
scope at a time::

    configure_logging(logging.DEBUG, scopes=["checkout"])
"""

import logging
import sys
from typing import Iterable, Optional

ROOT_LOGGER_NAME = "pico_abtest"

NO_SCOPE = "-"
"""str: ``record.scope`` value for records not tied to a test."""

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(scope)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``pico_abtest`` namespace."""
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


class ScopeFilter(logging.Filter):
    """Fills in ``record.scope`` and optionally keeps only some scopes.

    Records without a scope always pass.

    Args:
        scopes: Scopes to keep. ``None`` keeps every scope.
    """

    def __init__(self, scopes: Optional[Iterable[str]] = None):
        super().__init__()
        self.scopes = frozenset(scopes) if scopes is not None else None

    def filter(self, record: logging.LogRecord) -> bool:
        scope = getattr(record, "scope", None)
        if scope is None:
            record.scope = NO_SCOPE
            return True
        return self.scopes is None or scope in self.scopes


def configure_logging(
    level: int = logging.INFO,
    handler: Optional[logging.Handler] = None,
    scopes: Optional[Iterable[str]] = None,
) -> None:
    """Configure the ``pico_abtest`` logger.

    The first call installs *handler* (stderr by default) with
    ``DEFAULT_FORMAT``.  Later calls update the level and the scope
    selection of the installed handlers, never adding another one.

    Args:
        level: Logging level.
        handler: Custom handler, used only by the first call.
        scopes: Only emit records for these test scopes.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    if not root_logger.handlers:
        if handler is None:
            handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        root_logger.addHandler(handler)

    for installed in root_logger.handlers:
        for old in [f for f in installed.filters if isinstance(f, ScopeFilter)]:
            installed.removeFilter(old)
        installed.addFilter(ScopeFilter(scopes))
