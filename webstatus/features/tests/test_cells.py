import pytest

from webstatus.features.cells import (
    CELL_DEFS,
    get_browser_and_channel,
    render_baseline_status,
    render_browser_quality,
    render_browser_quality_exp,
    render_feature_cell,
    render_header_cell,
)
from webstatus.features.columns import BROWSER_CHANNEL_COLUMN_KEYS, ColumnKey, ColumnOptionKey
from webstatus.features.query import RouterLocation
from webstatus.features.tests.factories import build_feature, feature_with_scores
from webstatus.webstatus_client.models import Feature

LOW_DATE_BLOCK = 'class="baseline-date-block baseline-date-block-newly"'
HIGH_DATE_BLOCK = 'class="baseline-date-block baseline-date-block-widely"'


def stable_cell(payload, column=ColumnKey.STABLE_CHROME):
    return str(render_feature_cell(Feature.build(**payload), RouterLocation(), column))


class TestRegistry:
    def test_every_column_has_a_definition(self):
        assert set(CELL_DEFS) == set(ColumnKey)
        assert all(col_def.cell_renderer is not None for col_def in CELL_DEFS.values())

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            CELL_DEFS[ColumnKey.NAME] = CELL_DEFS[ColumnKey.BASELINE_STATUS]

    def test_baseline_column_options(self):
        options = CELL_DEFS[ColumnKey.BASELINE_STATUS].options.column_options
        assert [option.column_option_key for option in options] == [
            ColumnOptionKey.BASELINE_STATUS_LOW_DATE,
            ColumnOptionKey.BASELINE_STATUS_HIGH_DATE,
        ]

    def test_dialog_names(self):
        assert CELL_DEFS[ColumnKey.NAME].name_in_dialog == "Feature name"
        assert CELL_DEFS[ColumnKey.STABLE_FIREFOX].name_in_dialog == "Browser Implementation in Firefox"
        assert CELL_DEFS[ColumnKey.EXP_SAFARI].name_in_dialog == "Browser Implementation in Safari Experimental"

    def test_header_html(self):
        assert str(CELL_DEFS[ColumnKey.NAME].header_html) == "Feature"
        assert str(CELL_DEFS[ColumnKey.STABLE_EDGE].header_html) == '<img src="/public/img/edge_24x24.png" />'
        assert (
            str(CELL_DEFS[ColumnKey.EXP_FIREFOX].header_html)
            == '<img src="/public/img/firefox-nightly_24x24.png" /> Experimental'
        )


class TestGetBrowserAndChannel:
    @pytest.mark.parametrize(
        "column_key,expected",
        [
            (ColumnKey.STABLE_CHROME, ("chrome", "stable")),
            (ColumnKey.STABLE_SAFARI, ("safari", "stable")),
            (ColumnKey.EXP_EDGE, ("edge", "experimental")),
            (ColumnKey.EXP_FIREFOX, ("firefox", "experimental")),
        ],
    )
    def test_browser_columns(self, column_key, expected):
        assert get_browser_and_channel(column_key) == expected

    def test_all_browser_columns_resolve(self):
        for column_key in BROWSER_CHANNEL_COLUMN_KEYS:
            get_browser_and_channel(column_key)

    @pytest.mark.parametrize("column_key", [ColumnKey.NAME, ColumnKey.BASELINE_STATUS])
    def test_columns_without_browser_raise(self, column_key):
        with pytest.raises(ValueError, match="browser is undefined"):
            get_browser_and_channel(column_key)


class TestRenderFeatureCell:
    def test_unknown_column_renders_nothing(self, feature):
        assert render_feature_cell(feature, RouterLocation(), "not_a_column") is None

    def test_name_links_to_feature_page(self, feature):
        html = str(render_feature_cell(feature, RouterLocation("q=grid&num=50&foo=bar"), ColumnKey.NAME))
        assert html == '<a href="/features/grid?q=grid&amp;num=50">Grid</a>'

    def test_name_is_escaped(self):
        feature = build_feature(feature_id="tags", name="<dialog>")
        assert "&lt;dialog&gt;" in str(render_feature_cell(feature, RouterLocation(), ColumnKey.NAME))


class TestRenderBaselineStatus:
    def test_no_status_renders_empty(self):
        feature = build_feature(baseline=None)
        assert render_baseline_status(feature, RouterLocation(), CELL_DEFS[ColumnKey.BASELINE_STATUS].options) == ""

    def test_chip_only_by_default(self, feature):
        html = str(render_feature_cell(feature, RouterLocation(), ColumnKey.BASELINE_STATUS))
        assert '<span class="chip widely"><img height="16" src="/public/img/check.svg" /> Widely available</span>' in html
        assert LOW_DATE_BLOCK not in html
        assert HIGH_DATE_BLOCK not in html

    def test_low_date_selected(self, feature):
        location = RouterLocation("column_options=baseline_status_low_date")
        html = str(render_feature_cell(feature, location, ColumnKey.BASELINE_STATUS))
        assert LOW_DATE_BLOCK in html
        assert '<span class="baseline-date-header">Newly available:</span>' in html
        assert '<span class="baseline-date">2015-07-29</span>' in html
        assert HIGH_DATE_BLOCK not in html

    def test_both_dates_selected(self, feature):
        location = RouterLocation("column_options=baseline_status_low_date%2Cbaseline_status_high_date")
        html = str(render_feature_cell(feature, location, ColumnKey.BASELINE_STATUS))
        assert LOW_DATE_BLOCK in html
        assert HIGH_DATE_BLOCK in html
        assert '<span class="baseline-date-header">Widely available:</span>' in html
        assert '<span class="baseline-date">2018-01-29</span>' in html

    def test_projected_high_date(self):
        feature = build_feature(baseline={"status": "newly", "low_date": "2015-07-29"})
        location = RouterLocation("column_options=baseline_status_high_date")
        html = str(render_feature_cell(feature, location, ColumnKey.BASELINE_STATUS))
        assert '<span class="chip newly">' in html
        assert LOW_DATE_BLOCK not in html
        assert '<span class="baseline-date-header">Projected widely available:</span>' in html
        assert '<span class="baseline-date">2018-01-29</span>' in html

    def test_limited_never_shows_dates(self):
        feature = build_feature(baseline={"status": "limited"})
        location = RouterLocation("column_options=baseline_status_low_date,baseline_status_high_date")
        html = str(render_feature_cell(feature, location, ColumnKey.BASELINE_STATUS))
        assert "Limited availability" in html
        assert "baseline-date-block" not in html


class TestRenderBrowserQuality:
    def test_percentage(self):
        html = stable_cell(feature_with_scores(score=0.999, version="120"))
        assert html.startswith('<div class="browser-impl-available">')
        assert '<span class="icon icon-check-circle" title="Since version 120"></span>' in html
        assert '<span class="percent">99.9%</span>' in html

    def test_full_score(self):
        assert '<span class="percent">100%</span>' in stable_cell(feature_with_scores(score=1.0))

    def test_missing_score(self):
        payload = feature_with_scores()
        payload["wpt"] = {}
        html = stable_cell(payload)
        assert '<span class="missing percent">---</span>' in html

    def test_no_version_has_no_tooltip(self):
        html = stable_cell(feature_with_scores(version=None))
        assert '<span class="icon icon-check-circle"></span>' in html

    def test_unavailable_hides_score(self):
        html = stable_cell(feature_with_scores(score=0.8, status="unavailable"))
        assert html.startswith('<div class="browser-impl-unavailable">')
        assert "icon-minus-circle" in html
        assert '<span class="missing percent">---</span>' in html
        assert "80.0%" not in html

    def test_missing_implementation_is_unavailable(self):
        payload = feature_with_scores(score=0.8)
        payload["browser_implementations"] = {}
        html = stable_cell(payload)
        assert 'class="browser-impl-unavailable"' in html
        assert '<span class="missing percent">---</span>' in html

    def test_javascript_feature(self):
        payload = feature_with_scores(score=0.8, status="unavailable")
        payload["spec"] = {"links": [{"link": "https://tc39.es/proposal-temporal"}]}
        html = stable_cell(payload)
        assert "WPT metrics are not applicable to TC39 features." in html
        assert "---" not in html

    def test_insufficient_test_coverage_beats_javascript(self):
        payload = feature_with_scores(feature_id="webvtt", score=0.8)
        payload["spec"] = {"links": [{"link": "https://tc39.es/proposal-temporal"}]}
        html = stable_cell(payload)
        assert "Insufficient test coverage." in html
        assert "TC39" not in html

    def test_crash_beats_everything(self):
        payload = feature_with_scores(feature_id="webvtt", score=0.8, status="unavailable")
        payload["spec"] = {"links": [{"link": "https://tc39.es/proposal-temporal"}]}
        payload["wpt"]["stable"]["chrome"]["metadata"] = {"status": "C"}
        html = stable_cell(payload)
        assert "incomplete due to a crash" in html
        assert "Insufficient test coverage." not in html

    def test_crash_is_per_browser(self):
        payload = feature_with_scores(score=0.8)
        payload["wpt"]["stable"]["chrome"]["metadata"] = {"status": "C"}
        assert "80.0%" in stable_cell(payload, ColumnKey.STABLE_EDGE)

    def test_experimental_shows_percentage_only(self):
        payload = feature_with_scores(feature_id="webvtt", score=0.25, status="unavailable")
        payload["wpt"]["experimental"]["chrome"]["metadata"] = {"status": "C"}
        html = stable_cell(payload, ColumnKey.EXP_CHROME)
        assert html == '<span class="percent">25.0%</span>'

    def test_experimental_missing_score(self):
        html = str(
            render_browser_quality_exp(
                build_feature(), RouterLocation(), CELL_DEFS[ColumnKey.EXP_SAFARI].options
            )
        )
        assert html == '<span class="missing percent">---</span>'

    def test_renderer_uses_column_browser(self):
        payload = feature_with_scores(score=0.5)
        payload["wpt"]["stable"]["firefox"]["score"] = 0.75
        feature = Feature.build(**payload)
        html = str(render_browser_quality(feature, RouterLocation(), CELL_DEFS[ColumnKey.STABLE_FIREFOX].options))
        assert "75.0%" in html


class TestRenderHeaderCell:
    def test_unsorted_column_links_to_ascending(self):
        html = str(render_header_cell(RouterLocation("start=50"), ColumnKey.NAME, "baseline_status_desc"))
        assert html == '<a href="/?start=0&amp;sort=name_asc">Feature</a>'

    def test_ascending_column_links_to_descending(self):
        html = str(render_header_cell(RouterLocation("sort=name_asc"), ColumnKey.NAME, "name_asc"))
        assert html == '<a href="/?sort=name_desc&amp;start=0"><span class="icon icon-arrow-up"></span> Feature</a>'

    def test_descending_column_links_to_ascending(self):
        html = str(render_header_cell(RouterLocation("sort=name_desc"), ColumnKey.NAME, "name_desc"))
        assert html == '<a href="/?sort=name_asc&amp;start=0"><span class="icon icon-arrow-down"></span> Feature</a>'
