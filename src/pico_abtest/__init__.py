from .config import AbTestConfig, AbTestSettings, COOKIE_NAMESPACE, DEFAULT_SCOPE
from .interfaces import CookieHandler, CrawlerDetector, RandomExtractor
from .adapters import InMemoryCookieHandler, RequestCookieHandler, NoCrawlerDetector, UserAgentCrawlerDetector, UniformRandomExtractor
from .weights import ThresholdTable, process_weights
from .assigner import VersionAssigner
from .variants import Variant, RealUserVariant, CrawlerVariant
from .registry import AbTestRegistry
from .events import VersionAssignedEvent
from .factory import AbTestInfrastructureFactory
from .validation import AbTestValidator, ValidationReport, ConfigIssue
from .exceptions import (
    AbTestError,
    AbTestConfigurationError,
    DuplicateScopeError,
    UnknownScopeError,
    InsufficientVersionsError,
    DuplicateVersionError,
    InvalidCrawlerVersionError,
    UnknownWeightedVersionError,
    WeightOverflowError,
)

__all__ = [
    "AbTestConfig",
    "AbTestSettings",
    "COOKIE_NAMESPACE",
    "DEFAULT_SCOPE",
    "CookieHandler",
    "CrawlerDetector",
    "RandomExtractor",
    "InMemoryCookieHandler",
    "RequestCookieHandler",
    "NoCrawlerDetector",
    "UserAgentCrawlerDetector",
    "UniformRandomExtractor",
    "ThresholdTable",
    "process_weights",
    "VersionAssigner",
    "Variant",
    "RealUserVariant",
    "CrawlerVariant",
    "AbTestRegistry",
    "VersionAssignedEvent",
    "AbTestInfrastructureFactory",
    "AbTestValidator",
    "ValidationReport",
    "ConfigIssue",
    "AbTestError",
    "AbTestConfigurationError",
    "DuplicateScopeError",
    "UnknownScopeError",
    "InsufficientVersionsError",
    "DuplicateVersionError",
    "InvalidCrawlerVersionError",
    "UnknownWeightedVersionError",
    "WeightOverflowError",
]
