"""Resolved per-scope test state.

A scope resolves to exactly one of two variant kinds, chosen for the whole
page load:

* ``RealUserVariant`` - the visitor was assigned a version.  Never renders
  on a crawler path.
* ``CrawlerVariant`` - the visitor is a crawler and sees the configured
  ``version_for_crawlers`` (or nothing).  Never renders on a real-user path.

``Variant`` is the closed union of both; ``should_render`` matches on it.
"""

from dataclasses import dataclass
from typing import Collection, Optional, Tuple, Union


@dataclass(frozen=True)
class RealUserVariant:
    versions: Tuple[str, ...]
    version: str

    def __post_init__(self):
        if self.version not in self.versions:
            raise ValueError(f"Version <{self.version}> is not one of {list(self.versions)}")


@dataclass(frozen=True)
class CrawlerVariant:
    version: Optional[str] = None


Variant = Union[RealUserVariant, CrawlerVariant]


def should_render(variant: Variant, versions: Collection[str], for_crawlers: bool) -> bool:
    """Tell whether content tagged with *versions* renders for *variant*.

    Args:
        variant: The resolved scope state.
        versions: Versions the content is shown for.
        for_crawlers: ``True`` when the content is the crawler rendering.

    Returns:
        ``True`` when the content should be rendered.
    """
    if isinstance(variant, RealUserVariant):
        if for_crawlers:
            return False
        return variant.version in versions
    if isinstance(variant, CrawlerVariant):
        if not for_crawlers:
            return False
        return variant.version is not None and variant.version in versions
    raise TypeError(f"Unsupported variant type: {type(variant).__name__}")


def chosen_version(variant: Variant) -> Optional[str]:
    if isinstance(variant, (RealUserVariant, CrawlerVariant)):
        return variant.version
    raise TypeError(f"Unsupported variant type: {type(variant).__name__}")
