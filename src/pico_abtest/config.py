import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Annotated, Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SCOPE = "default"
COOKIE_NAMESPACE = "pico-abtest"

VersionName = Annotated[str, Field(min_length=1)]
Percentage = Annotated[float, Field(ge=0, le=100)]


def default_cookie_namespace() -> str:
    return os.getenv("PICO_ABTEST_COOKIE_NAMESPACE", COOKIE_NAMESPACE)


class AbTestConfig(BaseModel):
    """Declarative definition of one A/B test scope.

    Attributes:
        scope: Test name; ``None`` selects the default scope.
        versions: Ordered version names offered by the test.
        weights: Partial mapping of version name to percentage.  Versions
            left out share whatever percentage remains.
        domain: Cookie domain for the persisted choice.
        expiration: Cookie lifetime.  ``None`` keeps a session cookie.
        version_for_crawlers: Version rendered for crawlers, or ``None`` to
            render nothing for them.
    """

    model_config = ConfigDict(frozen=True)

    scope: Optional[str] = None
    versions: Tuple[VersionName, ...]
    weights: Dict[VersionName, Percentage] = Field(default_factory=dict)
    domain: Optional[str] = None
    expiration: Optional[timedelta] = None
    version_for_crawlers: Optional[str] = None


@dataclass
class AbTestSettings:
    tests: List[AbTestConfig] = field(default_factory=list)
    cookie_namespace: str = field(default_factory=default_cookie_namespace)
    default_scope: str = DEFAULT_SCOPE

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AbTestSettings":
        tests = [AbTestConfig.model_validate(item) for item in data.get("tests", [])]
        return cls(
            tests=tests,
            cookie_namespace=data.get("cookie_namespace") or default_cookie_namespace(),
            default_scope=data.get("default_scope") or DEFAULT_SCOPE,
        )


def cookie_name(namespace: str, scope: str) -> str:
    return f"{namespace}-{scope}"
