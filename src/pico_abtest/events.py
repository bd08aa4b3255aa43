"""Events published by the assignment engine.

When the container provides pico-ioc's ``EventBus``, the registry publishes
a ``VersionAssignedEvent`` every time a visitor receives a version for the
first time.  Subscribers typically forward these exposures to analytics.
"""

from dataclasses import dataclass

from pico_ioc import Event


@dataclass
class VersionAssignedEvent(Event):
    """A visitor was assigned a version and the choice was persisted.

    Args:
        scope: The test scope.
        version: The version that was rolled.
        cookie_name: The persistence key the version was written under.
    """

    scope: str
    version: str
    cookie_name: str
