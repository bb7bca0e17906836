import dataclasses
from types import MappingProxyType

from django.templatetags.static import static
from django.utils.html import format_html
from django.utils.safestring import mark_safe

from webstatus.features.baseline import BaselineDateBlock, classify_baseline
from webstatus.features.columns import (
    ColumnDefinition,
    ColumnKey,
    ColumnOptionDefinition,
    ColumnOptionKey,
    ColumnOptions,
    parse_column_options,
)
from webstatus.features.quality import (
    MISSING_VALUE,
    did_feature_crash,
    format_percentage,
    has_insufficient_test_coverage,
    is_javascript_feature,
)
from webstatus.features.query import (
    SortDirection,
    format_feature_page_url,
    format_overview_page_url,
    format_sort_spec,
    get_column_options,
    next_sort_spec,
)
from webstatus.webstatus_client.models import (
    Browser,
    BrowserImplementationStatus,
    Channel,
    Feature,
    WPTSnapshot,
)

BROWSER_IMPL_ICONS = {
    BrowserImplementationStatus.unavailable: "minus-circle",
    BrowserImplementationStatus.available: "check-circle",
}

TC39_FEATURE_MESSAGE = "WPT metrics are not applicable to TC39 features."
INSUFFICIENT_TEST_COVERAGE_MESSAGE = "Insufficient test coverage."
FEATURE_CRASH_MESSAGE = (
    "Feature's WPT run metrics are incomplete due to a crash. See wpt.fyi for more information."
)


def render_feature_name(feature: Feature, location, options: ColumnOptions):
    return format_html('<a href="{}">{}</a>', format_feature_page_url(feature, location), feature.name)


def _render_date_block(block: BaselineDateBlock | None):
    if block is None:
        return ""
    return format_html(
        '<div class="baseline-date-block baseline-date-block-{}">'
        '<span class="baseline-date-header">{}:</span> <span class="baseline-date">{}</span>'
        "</div>",
        block.block_type,
        block.header,
        block.date,
    )


def render_baseline_status(feature: Feature, location, options: ColumnOptions):
    column_options = parse_column_options(get_column_options(location))
    classification = classify_baseline(feature.baseline, column_options)
    if classification is None:
        return mark_safe("")
    chip = classification.chip
    return format_html(
        '<span class="chip {}"><img height="16" src="{}" /> {}</span>{}{}',
        chip.css_class,
        static(f"img/{chip.icon}"),
        chip.word,
        _render_date_block(classification.low_date),
        _render_date_block(classification.high_date),
    )


def render_missing_percentage():
    return format_html('<span class="missing percent">{}</span>', MISSING_VALUE)


def render_percentage(score: float | None):
    percent = format_percentage(score)
    if percent is None:
        return render_missing_percentage()
    return format_html('<span class="percent">{}</span>', percent)


def _render_info_indicator(message, icon, label):
    return format_html(
        '<span class="missing percent" title="{}"><span class="icon icon-{}" aria-label="{}"></span></span>',
        message,
        icon,
        label,
    )


def render_javascript_feature_value():
    return _render_info_indicator(TC39_FEATURE_MESSAGE, "info-circle", "TC39 feature")


def render_insufficient_test_coverage():
    return _render_info_indicator(INSUFFICIENT_TEST_COVERAGE_MESSAGE, "info-circle", "insufficent-test-coverage")


def render_feature_crash():
    return _render_info_indicator(FEATURE_CRASH_MESSAGE, "exclamation-triangle", "feature-crash-warning")


@dataclasses.dataclass(frozen=True)
class BrowserQuality:
    feature: Feature
    snapshot: WPTSnapshot | None
    implementation_status: str


def _crashed(quality: BrowserQuality):
    return did_feature_crash(quality.snapshot.metadata if quality.snapshot else None)


def _insufficient_coverage(quality: BrowserQuality):
    return has_insufficient_test_coverage(quality.feature.feature_id)


def _javascript_feature(quality: BrowserQuality):
    return is_javascript_feature(quality.feature.spec)


def _unavailable(quality: BrowserQuality):
    return quality.implementation_status == BrowserImplementationStatus.unavailable


# Highest precedence first, the first matching rule replaces the score.
STABLE_QUALITY_OVERRIDES = (
    (_crashed, render_feature_crash),
    (_insufficient_coverage, render_insufficient_test_coverage),
    (_javascript_feature, render_javascript_feature_value),
    (_unavailable, render_missing_percentage),
)


def render_stable_percentage(quality: BrowserQuality):
    for applies, render in STABLE_QUALITY_OVERRIDES:
        if applies(quality):
            return render()
    return render_percentage(quality.snapshot.score if quality.snapshot else None)


def render_browser_quality(feature: Feature, location, options: ColumnOptions):
    browser_impl = feature.get_browser_implementation(options.browser)
    status = (browser_impl.status if browser_impl else None) or BrowserImplementationStatus.unavailable
    version = browser_impl.version if browser_impl else None
    quality = BrowserQuality(feature, feature.get_wpt_snapshot(Channel.stable, options.browser), status)

    icon_name = BROWSER_IMPL_ICONS.get(status, BROWSER_IMPL_ICONS[BrowserImplementationStatus.unavailable])
    if version is None:
        icon = format_html('<span class="icon icon-{}"></span>', icon_name)
    else:
        icon = format_html('<span class="icon icon-{}" title="Since version {}"></span>', icon_name, version)
    return format_html(
        '<div class="browser-impl-{}">{} {}</div>', status, icon, render_stable_percentage(quality)
    )


def render_browser_quality_exp(feature: Feature, location, options: ColumnOptions):
    snapshot = feature.get_wpt_snapshot(Channel.experimental, options.browser)
    return render_percentage(snapshot.score if snapshot else None)


def _browser_column(browser: Browser, channel: Channel, header_image: str) -> ColumnDefinition:
    if channel == Channel.stable:
        return ColumnDefinition(
            name_in_dialog=f"Browser Implementation in {browser.capitalize()}",
            header_text="",
            header_image=header_image,
            cell_renderer=render_browser_quality,
            options=ColumnOptions(browser=browser, channel=channel),
        )
    return ColumnDefinition(
        name_in_dialog=f"Browser Implementation in {browser.capitalize()} Experimental",
        header_text="Experimental",
        header_image=header_image,
        cell_renderer=render_browser_quality_exp,
        options=ColumnOptions(browser=browser, channel=channel),
    )


CELL_DEFS = MappingProxyType(
    {
        ColumnKey.NAME: ColumnDefinition(
            name_in_dialog="Feature name",
            header_text="Feature",
            cell_renderer=render_feature_name,
        ),
        ColumnKey.BASELINE_STATUS: ColumnDefinition(
            name_in_dialog="Baseline status",
            header_text="Baseline",
            cell_renderer=render_baseline_status,
            options=ColumnOptions(
                column_options=(
                    ColumnOptionDefinition("Show Baseline status low date", ColumnOptionKey.BASELINE_STATUS_LOW_DATE),
                    ColumnOptionDefinition(
                        "Show Baseline status high date", ColumnOptionKey.BASELINE_STATUS_HIGH_DATE
                    ),
                ),
            ),
        ),
        ColumnKey.STABLE_CHROME: _browser_column(Browser.chrome, Channel.stable, "chrome_24x24.png"),
        ColumnKey.STABLE_EDGE: _browser_column(Browser.edge, Channel.stable, "edge_24x24.png"),
        ColumnKey.STABLE_FIREFOX: _browser_column(Browser.firefox, Channel.stable, "firefox_24x24.png"),
        ColumnKey.STABLE_SAFARI: _browser_column(Browser.safari, Channel.stable, "safari_24x24.png"),
        ColumnKey.EXP_CHROME: _browser_column(Browser.chrome, Channel.experimental, "chrome-canary_24x24.png"),
        ColumnKey.EXP_EDGE: _browser_column(Browser.edge, Channel.experimental, "edge-dev_24x24.png"),
        ColumnKey.EXP_FIREFOX: _browser_column(Browser.firefox, Channel.experimental, "firefox-nightly_24x24.png"),
        ColumnKey.EXP_SAFARI: _browser_column(Browser.safari, Channel.experimental, "safari-preview_24x24.png"),
    }
)


def get_browser_and_channel(column_key: ColumnKey) -> tuple[str, str]:
    options = CELL_DEFS[column_key].options
    if not options.browser:
        raise ValueError(f"browser is undefined for column '{column_key}'")
    if not options.channel:
        raise ValueError(f"channel is undefined for column '{column_key}'")
    return options.browser, options.channel


def render_header_cell(location, column: ColumnKey, sort_spec: str):
    url = format_overview_page_url(location, sort=next_sort_spec(column, sort_spec), start=0)
    sort_indicator = ""
    if sort_spec == format_sort_spec(column, SortDirection.ASC):
        sort_indicator = mark_safe('<span class="icon icon-arrow-up"></span> ')
    elif sort_spec == format_sort_spec(column, SortDirection.DESC):
        sort_indicator = mark_safe('<span class="icon icon-arrow-down"></span> ')
    col_def = CELL_DEFS.get(column)
    header = col_def.header_html if col_def else ""
    return format_html('<a href="{}">{}{}</a>', url, sort_indicator, header)


def render_feature_cell(feature: Feature, location, column: ColumnKey):
    """Render the content of one overview cell, or None when the column has no renderer."""
    col_def = CELL_DEFS.get(column)
    if col_def and col_def.cell_renderer:
        return col_def.cell_renderer(feature, location, col_def.options)
    return None
