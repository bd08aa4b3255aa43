from typing import Sequence


def _fmt(versions: Sequence[str]) -> str:
    return "[ " + ", ".join(versions) + " ]"


class AbTestError(Exception):
    pass

class AbTestConfigurationError(AbTestError):
    pass

class DuplicateScopeError(AbTestConfigurationError):
    def __init__(self, scope: str):
        self.scope = scope
        super().__init__(f"Test with scope <{scope}> cannot be initialized twice")

class UnknownScopeError(AbTestConfigurationError):
    def __init__(self, scope: str):
        self.scope = scope
        super().__init__(f"Test with scope <{scope}> has not been defined")

class InsufficientVersionsError(AbTestConfigurationError):
    def __init__(self, versions: Sequence[str]):
        self.versions = tuple(versions)
        super().__init__(f"You have to provide at least two versions, got {_fmt(self.versions)}")

class DuplicateVersionError(AbTestConfigurationError):
    def __init__(self, version: str, versions: Sequence[str]):
        self.version = version
        self.versions = tuple(versions)
        super().__init__(f"Version <{version}> is repeated in the array of versions {_fmt(self.versions)}")

class InvalidCrawlerVersionError(AbTestConfigurationError):
    def __init__(self, version: str, versions: Sequence[str]):
        self.version = version
        self.versions = tuple(versions)
        super().__init__(f"Version for crawlers <{version}> is not included in versions {_fmt(self.versions)}")

class UnknownWeightedVersionError(AbTestConfigurationError):
    def __init__(self, version: str, versions: Sequence[str]):
        self.version = version
        self.versions = tuple(versions)
        super().__init__(f"Weight associated to <{version}> which is not included in versions {_fmt(self.versions)}")

class WeightOverflowError(AbTestConfigurationError):
    def __init__(self, total: float):
        self.total = total
        super().__init__(f"Sum of weights is <{total}>, while it should be less than 100")
