from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal

from webstatus.webstatus_client.models import FeatureSpecInfo

MISSING_VALUE = "---"

# JavaScript features have no WPT scores, the cell explains that instead of
# showing MISSING_VALUE.
JS_FEATURE_LINK_PREFIX = "https://tc39.es/"

CRASHED_RUN_STATUS = "C"

INSUFFICIENT_TEST_COVERAGE_FEATURES = frozenset(
    [
        "avif",  # 1 test, for animated AVIF, and it fails in Edge+Firefox+Safari.
        "counter-set",  # 2 tests, and counter-set-001.html failures need review.
        "declarative-shadow-dom",  # Dominated by getHTML() tests which fail in Firefox+Safari.
        "device-orientation-events",  # Failures are mostly because of permissions.
        "preserves-pitch",  # Timeouts in Firefox and Safari affect the scores a lot.
        "storage-access",  # 2 tests. idlharness.js is shallow, and the other fails.
        "webtransport",  # Harness errors could indicate a problem with the tests.
        "webvtt",  # Widespread failures due to default styling, see web-platform-tests/wpt#46453.
    ]
)


def is_javascript_feature(spec: FeatureSpecInfo | None) -> bool:
    if spec is None:
        return False
    return any(link.link and link.link.startswith(JS_FEATURE_LINK_PREFIX) for link in spec.links or [])


def has_insufficient_test_coverage(feature_id: str) -> bool:
    return feature_id in INSUFFICIENT_TEST_COVERAGE_FEATURES


def did_feature_crash(metadata: Mapping | None) -> bool:
    return isinstance(metadata, Mapping) and metadata.get("status") == CRASHED_RUN_STATUS


def format_percentage(score: float | None) -> str | None:
    if score is None:
        return None
    # ties round away from zero on the exact binary value
    percent = str(Decimal(score * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
    if percent == "100.0":
        percent = "100"
    return f"{percent}%"
