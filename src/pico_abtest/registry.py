"""A/B test registry.

``AbTestRegistry`` resolves every configured scope once, at construction,
and then answers render queries.  It is built per visitor context (one page
load or one request) and never changes afterwards.
"""

from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from pico_ioc import EventBus

from .assigner import VersionAssigner
from .config import COOKIE_NAMESPACE, DEFAULT_SCOPE, AbTestConfig, cookie_name
from .exceptions import DuplicateScopeError, UnknownScopeError
from .interfaces import CookieHandler, RandomExtractor
from .logging import get_logger
from .validation import check_crawler_version, filter_versions, parse_versions
from .variants import CrawlerVariant, RealUserVariant, Variant, chosen_version, should_render
from .weights import process_weights

logger = get_logger(__name__)


class AbTestRegistry:
    """Scope to variant mapping for one visitor.

    Whether the visitor is a crawler is decided once for the whole
    registry: every scope becomes a ``CrawlerVariant`` for crawlers and a
    ``RealUserVariant`` otherwise.

    Example:
        >>> registry = AbTestRegistry(
        ...     [AbTestConfig(scope="hero", versions=("old", "new"))],
        ...     is_crawler=False,
        ...     cookie_handler=InMemoryCookieHandler(),
        ...     random_extractor=UniformRandomExtractor(),
        ... )
        >>> registry.should_render(["new"], "hero")
    """

    def __init__(
        self,
        configs: Iterable[AbTestConfig],
        is_crawler: bool,
        cookie_handler: CookieHandler,
        random_extractor: RandomExtractor,
        cookie_namespace: str = COOKIE_NAMESPACE,
        default_scope: str = DEFAULT_SCOPE,
        event_bus: Optional[EventBus] = None,
    ):
        """Validate *configs* and resolve a variant for each scope.

        Args:
            configs: Test configurations, processed in order.
            is_crawler: Crawler status of the current visitor.
            cookie_handler: Persistence port for assigned versions.
            random_extractor: Random source for first assignments.
            cookie_namespace: Prefix of every cookie name.
            default_scope: Scope used when a config or query omits one.
            event_bus: Receives ``VersionAssignedEvent`` for fresh
                assignments when given.

        Raises:
            AbTestConfigurationError: Any invalid configuration.  Nothing is
                registered partially.
        """
        self._is_crawler = is_crawler
        self._default_scope = default_scope
        self._assigner = VersionAssigner(cookie_handler, random_extractor, event_bus)
        self._tests: Dict[str, Variant] = {}

        logger.debug("Resolving A/B tests for %s", "crawler" if is_crawler else "real user")
        for config in configs:
            scope = config.scope or default_scope
            if scope in self._tests:
                raise DuplicateScopeError(scope)
            self._tests[scope] = self._setup_test(scope, config, cookie_namespace)
            logger.debug("Scope <%s> registered: %r", scope, self._tests[scope], extra={"scope": scope})

        self._view = MappingProxyType(self._tests)

    def _setup_test(self, scope: str, config: AbTestConfig, cookie_namespace: str) -> Variant:
        versions = filter_versions(config.versions)
        crawler_version = check_crawler_version(config.version_for_crawlers, versions)
        table = process_weights(config.weights, versions)

        if self._is_crawler:
            return CrawlerVariant(crawler_version)

        version = self._assigner.assign(
            scope,
            table,
            cookie_name(cookie_namespace, scope),
            config.domain,
            config.expiration,
        )
        return RealUserVariant(versions, version)

    @property
    def is_crawler(self) -> bool:
        return self._is_crawler

    @property
    def scopes(self) -> Tuple[str, ...]:
        return tuple(self._tests)

    @property
    def variants(self) -> Mapping[str, Variant]:
        """Read-only view of the resolved variants."""
        return self._view

    def _variant(self, scope: Optional[str]) -> Variant:
        scope = scope or self._default_scope
        if scope not in self._tests:
            raise UnknownScopeError(scope)
        return self._tests[scope]

    def should_render(
        self,
        versions: Union[str, Iterable[str]],
        scope: Optional[str] = None,
        for_crawlers: bool = False,
    ) -> bool:
        """Tell whether content for *versions* renders in *scope*.

        Args:
            versions: Version names, as a sequence or ``"v1, v2"``.
            scope: Test scope; ``None`` or ``""`` means the default scope.
            for_crawlers: ``True`` for the crawler rendering of the content.

        Raises:
            UnknownScopeError: *scope* was never configured.
        """
        return should_render(self._variant(scope), parse_versions(versions), for_crawlers)

    def get_version(self, scope: Optional[str] = None) -> Optional[str]:
        """Return the version resolved for *scope*.

        ``None`` for crawlers when the scope has no crawler version.
        """
        return chosen_version(self._variant(scope))
