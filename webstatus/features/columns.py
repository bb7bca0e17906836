import dataclasses
from collections.abc import Callable, Iterable
from enum import StrEnum

from django.templatetags.static import static
from django.utils.html import format_html


class ColumnKey(StrEnum):
    NAME = "name"
    BASELINE_STATUS = "baseline_status"
    STABLE_CHROME = "stable_chrome"
    STABLE_EDGE = "stable_edge"
    STABLE_FIREFOX = "stable_firefox"
    STABLE_SAFARI = "stable_safari"
    EXP_CHROME = "experimental_chrome"
    EXP_EDGE = "experimental_edge"
    EXP_FIREFOX = "experimental_firefox"
    EXP_SAFARI = "experimental_safari"


class ColumnOptionKey(StrEnum):
    BASELINE_STATUS_HIGH_DATE = "baseline_status_high_date"
    BASELINE_STATUS_LOW_DATE = "baseline_status_low_date"


DEFAULT_COLUMNS = (
    ColumnKey.NAME,
    ColumnKey.BASELINE_STATUS,
    ColumnKey.STABLE_CHROME,
    ColumnKey.STABLE_EDGE,
    ColumnKey.STABLE_FIREFOX,
    ColumnKey.STABLE_SAFARI,
)

DEFAULT_COLUMN_OPTIONS = ()

BROWSER_CHANNEL_COLUMN_KEYS = (
    ColumnKey.STABLE_CHROME,
    ColumnKey.STABLE_EDGE,
    ColumnKey.STABLE_FIREFOX,
    ColumnKey.STABLE_SAFARI,
    ColumnKey.EXP_CHROME,
    ColumnKey.EXP_EDGE,
    ColumnKey.EXP_FIREFOX,
    ColumnKey.EXP_SAFARI,
)


@dataclasses.dataclass(frozen=True)
class ColumnOptionDefinition:
    name_in_dialog: str
    column_option_key: ColumnOptionKey


@dataclasses.dataclass(frozen=True)
class ColumnOptions:
    browser: str | None = None
    channel: str | None = None
    column_options: tuple[ColumnOptionDefinition, ...] = ()


@dataclasses.dataclass(frozen=True)
class ColumnDefinition:
    """How a single overview column is labelled, headed and rendered.

    ``cell_renderer`` is called as ``cell_renderer(feature, location, options)`` and
    returns the cell markup.
    """

    name_in_dialog: str
    header_text: str
    cell_renderer: Callable | None
    options: ColumnOptions = ColumnOptions()
    header_image: str | None = None

    @property
    def header_html(self):
        if self.header_image is None:
            return format_html("{}", self.header_text)
        image = format_html('<img src="{}" />', static(f"img/{self.header_image}"))
        if self.header_text:
            return format_html("{} {}", image, self.header_text)
        return image


def _parse_spec(spec: str | None, mapping: dict) -> list:
    tokens = (token.strip() for token in (spec or "").lower().split(","))
    keys = []
    for token in tokens:
        key = mapping.get(token)
        if key is not None and key not in keys:
            keys.append(key)
    return keys


_COLUMN_KEY_MAPPING = {key.value: key for key in ColumnKey}
_COLUMN_OPTION_KEY_MAPPING = {key.value: key for key in ColumnOptionKey}


def parse_columns_spec(spec: str | None) -> list[ColumnKey]:
    """Parse a comma separated ``columns`` value.

    Unknown tokens are dropped. When nothing usable is left the default columns are
    returned, so the table is never rendered without columns.
    """
    return _parse_spec(spec, _COLUMN_KEY_MAPPING) or list(DEFAULT_COLUMNS)


def parse_column_options(spec: str | None) -> list[ColumnOptionKey]:
    return _parse_spec(spec, _COLUMN_OPTION_KEY_MAPPING) or list(DEFAULT_COLUMN_OPTIONS)


def format_columns_spec(columns: Iterable[ColumnKey]) -> str:
    return ",".join(str(column) for column in columns)


def format_column_options(column_options: Iterable[ColumnOptionKey]) -> str:
    return ",".join(str(option) for option in column_options)


def resolve_column_key(value: str | None) -> ColumnKey | None:
    return _COLUMN_KEY_MAPPING.get((value or "").strip().lower())
