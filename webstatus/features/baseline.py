import dataclasses
from collections.abc import Collection

from webstatus.features.columns import ColumnOptionKey
from webstatus.utils.datetime import add_months, format_date
from webstatus.webstatus_client.models import BaselineInfo, BaselineStatus

# A feature becomes widely available 30 months after it became newly available.
# https://github.com/web-platform-dx/web-features/blob/main/docs/baseline.md
NEWLY_TO_WIDELY_MONTH_OFFSET = 30

NEWLY_AVAILABLE_HEADER = "Newly available"
WIDELY_AVAILABLE_HEADER = "Widely available"
PROJECTED_WIDELY_AVAILABLE_HEADER = "Projected widely available"


@dataclasses.dataclass(frozen=True)
class BaselineChipConfig:
    css_class: str
    icon: str
    word: str


BASELINE_CHIP_CONFIGS = {
    BaselineStatus.limited: BaselineChipConfig(css_class="limited", icon="cross.svg", word="Limited availability"),
    BaselineStatus.newly: BaselineChipConfig(css_class="newly", icon="newly.svg", word="Newly available"),
    BaselineStatus.widely: BaselineChipConfig(css_class="widely", icon="check.svg", word="Widely available"),
}


@dataclasses.dataclass(frozen=True)
class BaselineDateBlock:
    header: str
    date: str
    block_type: str


@dataclasses.dataclass(frozen=True)
class BaselineClassification:
    chip: BaselineChipConfig
    low_date: BaselineDateBlock | None = None
    high_date: BaselineDateBlock | None = None


def project_widely_available_date(low_date):
    return add_months(low_date, NEWLY_TO_WIDELY_MONTH_OFFSET)


def classify_baseline(
    baseline: BaselineInfo | None, column_options: Collection[ColumnOptionKey]
) -> BaselineClassification | None:
    """Decide which chip and which dates to show for a feature's Baseline status.

    Returns None when the feature has no (known) status. The low date is only shown
    when it exists and ``BASELINE_STATUS_LOW_DATE`` is selected. With
    ``BASELINE_STATUS_HIGH_DATE`` selected the recorded high date wins, otherwise the
    high date is projected from the low date.
    """
    status = baseline.status if baseline else None
    chip = BASELINE_CHIP_CONFIGS.get(status)
    if chip is None:
        return None

    show_low_date = ColumnOptionKey.BASELINE_STATUS_LOW_DATE in column_options
    show_high_date = ColumnOptionKey.BASELINE_STATUS_HIGH_DATE in column_options

    low_date_block = None
    if baseline.low_date and show_low_date:
        low_date_block = BaselineDateBlock(NEWLY_AVAILABLE_HEADER, format_date(baseline.low_date), "newly")

    high_date_block = None
    if baseline.high_date and show_high_date:
        high_date_block = BaselineDateBlock(WIDELY_AVAILABLE_HEADER, format_date(baseline.high_date), "widely")
    elif baseline.low_date and show_high_date:
        projected = project_widely_available_date(baseline.low_date)
        high_date_block = BaselineDateBlock(PROJECTED_WIDELY_AVAILABLE_HEADER, format_date(projected), "widely")

    return BaselineClassification(chip, low_date_block, high_date_block)
