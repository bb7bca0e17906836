import dataclasses
from enum import StrEnum


class BaselineStatus(StrEnum):
    limited = "limited"
    newly = "newly"
    widely = "widely"


class BrowserImplementationStatus(StrEnum):
    available = "available"
    unavailable = "unavailable"


class Browser(StrEnum):
    chrome = "chrome"
    edge = "edge"
    firefox = "firefox"
    safari = "safari"


class Channel(StrEnum):
    stable = "stable"
    experimental = "experimental"


@dataclasses.dataclass
class BaselineInfo:
    status: str | None = None
    low_date: str | None = None
    high_date: str | None = None

    @classmethod
    def build(cls, status: str | None = None, low_date: str | None = None, high_date: str | None = None, **kwargs):
        return cls(status, low_date, high_date)


@dataclasses.dataclass
class SpecLink:
    link: str | None = None


@dataclasses.dataclass
class FeatureSpecInfo:
    links: list[SpecLink] = dataclasses.field(default_factory=list)

    @classmethod
    def build(cls, links: list[dict] | None = None, **kwargs):
        return cls([SpecLink(link.get("link")) for link in links or []])


@dataclasses.dataclass
class BrowserImplementation:
    status: str | None = None
    version: str | None = None
    date: str | None = None

    @classmethod
    def build(cls, status: str | None = None, version: str | None = None, date: str | None = None, **kwargs):
        return cls(status, version, date)


@dataclasses.dataclass
class WPTSnapshot:
    score: float | None = None
    metadata: dict | None = None

    @classmethod
    def build(cls, score: float | None = None, metadata: dict | None = None, **kwargs):
        return cls(score, metadata)


@dataclasses.dataclass
class Feature:
    feature_id: str
    name: str
    spec: FeatureSpecInfo | None = None
    baseline: BaselineInfo | None = None
    browser_implementations: dict[str, BrowserImplementation] = dataclasses.field(default_factory=dict)
    wpt: dict[str, dict[str, WPTSnapshot]] = dataclasses.field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.name} ({self.feature_id})"

    @classmethod
    def build(
        cls,
        feature_id: str,
        name: str,
        spec: dict | None = None,
        baseline: dict | None = None,
        browser_implementations: dict | None = None,
        wpt: dict | None = None,
        **kwargs,
    ):
        return cls(
            feature_id=feature_id,
            name=name,
            spec=FeatureSpecInfo.build(**spec) if spec is not None else None,
            baseline=BaselineInfo.build(**baseline) if baseline is not None else None,
            browser_implementations={
                browser: BrowserImplementation.build(**impl) for browser, impl in (browser_implementations or {}).items()
            },
            wpt={
                channel: {browser: WPTSnapshot.build(**snapshot) for browser, snapshot in (browsers or {}).items()}
                for channel, browsers in (wpt or {}).items()
            },
        )

    def get_wpt_snapshot(self, channel: str, browser: str) -> WPTSnapshot | None:
        return self.wpt.get(channel, {}).get(browser)

    def get_browser_implementation(self, browser: str) -> BrowserImplementation | None:
        return self.browser_implementations.get(browser)


@dataclasses.dataclass
class PageMetadata:
    total: int | None = None
    next_page_token: str | None = None

    @classmethod
    def build(cls, total: int | None = None, next_page_token: str | None = None, **kwargs):
        return cls(total, next_page_token)

    def asdict(self):
        return {key: value for key, value in dataclasses.asdict(self).items() if value is not None}


@dataclasses.dataclass
class FeaturePage:
    metadata: PageMetadata
    data: list[Feature]

    @classmethod
    def build(cls, metadata: dict | None = None, data: list[dict] | None = None, **kwargs):
        return cls(PageMetadata.build(**(metadata or {})), [Feature.build(**feature) for feature in data or []])


@dataclasses.dataclass
class MissingOneImplementationCount:
    event_date: str
    count: int


@dataclasses.dataclass
class MissingOneImplementationPage:
    metadata: PageMetadata
    data: list[MissingOneImplementationCount]

    @classmethod
    def build(cls, metadata: dict | None = None, data: list[dict] | None = None, **kwargs):
        return cls(
            PageMetadata.build(**(metadata or {})),
            [MissingOneImplementationCount(item["event_date"], item["count"]) for item in data or []],
        )

    def asdict(self):
        return {
            "metadata": self.metadata.asdict(),
            "data": [dataclasses.asdict(item) for item in self.data],
        }
