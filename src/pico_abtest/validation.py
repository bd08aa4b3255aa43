"""Version list checks and the non-raising configuration validator."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .config import DEFAULT_SCOPE, AbTestConfig
from .exceptions import (
    AbTestConfigurationError,
    DuplicateScopeError,
    DuplicateVersionError,
    InsufficientVersionsError,
    InvalidCrawlerVersionError,
)
from .logging import get_logger
from .weights import ThresholdTable, process_weights

logger = get_logger(__name__)


def filter_versions(versions: Sequence[str]) -> Tuple[str, ...]:
    if len(versions) < 2:
        raise InsufficientVersionsError(versions)
    seen: List[str] = []
    for version in versions:
        if version in seen:
            raise DuplicateVersionError(version, versions)
        seen.append(version)
    return tuple(seen)


def check_crawler_version(version: Optional[str], versions: Sequence[str]) -> Optional[str]:
    if version and version not in versions:
        raise InvalidCrawlerVersionError(version, versions)
    return version or None


def parse_versions(value: Union[str, Iterable[str]]) -> Tuple[str, ...]:
    """Accept ``["v1", "v2"]`` or the template form ``"v1, v2"``."""
    if isinstance(value, str):
        return tuple(v.strip() for v in value.split(",") if v.strip())
    return tuple(value)


@dataclass(frozen=True)
class ConfigIssue:
    """A problem found in one field of one test's configuration.

    Attributes:
        scope: Resolved scope of the test.
        field: ``AbTestConfig`` field at fault (``"scope"``, ``"versions"``,
            ``"weights"`` or ``"version_for_crawlers"``).
        message: Human readable description.
        level: ``logging.ERROR`` when the registry would reject the
            configuration, ``logging.WARNING`` when it is legal but
            probably unintended.
        error: The exception the registry raises for this problem, if any.
    """

    scope: str
    field: str
    message: str
    level: int = logging.ERROR
    error: Optional[AbTestConfigurationError] = None

    @property
    def is_error(self) -> bool:
        return self.level >= logging.ERROR

    def __str__(self) -> str:
        return f"[{self.scope}] {self.field}: {self.message}"


@dataclass
class ValidationReport:
    issues: List[ConfigIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def errors(self) -> List[ConfigIssue]:
        return [i for i in self.issues if i.is_error]

    @property
    def warnings(self) -> List[ConfigIssue]:
        return [i for i in self.issues if not i.is_error]

    @property
    def scopes(self) -> Tuple[str, ...]:
        """Scopes with at least one issue, in configuration order."""
        return tuple(dict.fromkeys(i.scope for i in self.issues))

    def for_scope(self, scope: str) -> List[ConfigIssue]:
        return [i for i in self.issues if i.scope == scope]

    def raise_first_error(self) -> None:
        """Raise what ``AbTestRegistry`` would raise for these configs."""
        for issue in self.errors:
            if issue.error is not None:
                raise issue.error

    def log(self, target: Optional[logging.Logger] = None) -> None:
        """Emit every issue at its level, tagged with its scope."""
        target = target or logger
        for issue in self.issues:
            target.log(issue.level, "%s: %s", issue.field, issue.message, extra={"scope": issue.scope})


def _empty_buckets(table: ThresholdTable) -> List[str]:
    empty = []
    previous = 0.0
    for threshold, version in table:
        if threshold <= previous:
            empty.append(version)
        previous = threshold
    return empty


class AbTestValidator:
    """Checks test configurations without raising.

    Reports every problem the registry would reject, in the order it would
    meet them, plus warnings for setups that are legal but probably
    unintended.
    """

    def __init__(self, default_scope: str = DEFAULT_SCOPE):
        self.default_scope = default_scope

    def validate(self, configs: Iterable[AbTestConfig]) -> ValidationReport:
        report = ValidationReport()
        scopes: List[str] = []

        def fail(scope: str, field_name: str, exc: AbTestConfigurationError) -> None:
            report.issues.append(ConfigIssue(scope, field_name, str(exc), logging.ERROR, exc))

        for config in configs:
            scope = config.scope or self.default_scope
            if scope in scopes:
                fail(scope, "scope", DuplicateScopeError(scope))
                continue
            scopes.append(scope)

            try:
                versions = filter_versions(config.versions)
            except AbTestConfigurationError as exc:
                fail(scope, "versions", exc)
                continue

            try:
                check_crawler_version(config.version_for_crawlers, versions)
            except AbTestConfigurationError as exc:
                fail(scope, "version_for_crawlers", exc)

            try:
                table = process_weights(config.weights, versions)
            except AbTestConfigurationError as exc:
                fail(scope, "weights", exc)
            else:
                for version in _empty_buckets(table):
                    report.issues.append(ConfigIssue(
                        scope,
                        "weights",
                        f"Version <{version}> has an empty bucket and will never be assigned",
                        logging.WARNING,
                    ))

            if not config.version_for_crawlers:
                report.issues.append(ConfigIssue(
                    scope,
                    "version_for_crawlers",
                    "No version for crawlers, crawlers will not see this test",
                    logging.WARNING,
                ))

        return report
