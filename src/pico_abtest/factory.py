from pico_ioc import EventBus, PicoContainer, factory, provides

from .adapters import InMemoryCookieHandler, NoCrawlerDetector, UniformRandomExtractor
from .config import AbTestSettings
from .interfaces import CookieHandler, CrawlerDetector, RandomExtractor
from .registry import AbTestRegistry


@factory
class AbTestInfrastructureFactory:
    """Default wiring for the assignment engine.

    Every binding can be replaced through ``init(..., overrides={...})``.
    ``AbTestRegistry`` is a prototype: each lookup resolves a fresh
    registry, so each visitor context gets its own.
    """

    def __init__(self, container: PicoContainer):
        self.container = container

    @provides(AbTestSettings, scope="singleton")
    def provide_settings(self) -> AbTestSettings:
        return AbTestSettings()

    @provides(CookieHandler, scope="singleton")
    def provide_cookie_handler(self) -> CookieHandler:
        return InMemoryCookieHandler()

    @provides(CrawlerDetector, scope="singleton")
    def provide_crawler_detector(self) -> CrawlerDetector:
        return NoCrawlerDetector()

    @provides(RandomExtractor, scope="singleton")
    def provide_random_extractor(self) -> RandomExtractor:
        return UniformRandomExtractor()

    @provides(AbTestRegistry, scope="prototype")
    def provide_registry(
        self,
        settings: AbTestSettings,
        cookie_handler: CookieHandler,
        crawler_detector: CrawlerDetector,
        random_extractor: RandomExtractor,
    ) -> AbTestRegistry:
        event_bus = self.container.get(EventBus) if self.container.has(EventBus) else None
        return AbTestRegistry(
            settings.tests,
            is_crawler=crawler_detector.is_crawler(),
            cookie_handler=cookie_handler,
            random_extractor=random_extractor,
            cookie_namespace=settings.cookie_namespace,
            default_scope=settings.default_scope,
            event_bus=event_bus,
        )
