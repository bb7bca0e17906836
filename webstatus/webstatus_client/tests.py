import datetime

import httpx
import pytest
from httpx import URL

from .main import WebStatusAPIError, get_feature, list_features, list_missing_one_implementation_counts
from .models import BaselineStatus, BrowserImplementationStatus


def test_list_features(httpx_mock):
    httpx_mock.add_response(
        method="GET",
        json={
            "metadata": {"total": 2},
            "data": [
                {
                    "feature_id": "grid",
                    "name": "Grid",
                    "baseline": {"status": "widely", "low_date": "2017-10-17", "high_date": "2020-04-17"},
                    "browser_implementations": {"chrome": {"status": "available", "version": "57"}},
                    "wpt": {"stable": {"chrome": {"score": 0.98, "metadata": {"status": "C"}}}},
                    "usage": 0.9,
                },
                {"feature_id": "popover", "name": "Popover"},
            ],
        },
    )

    page = list_features(query="name:grid", sort="name_asc", start=50, page_size=50)
    assert page.metadata.total == 2
    assert [feature.feature_id for feature in page.data] == ["grid", "popover"]

    grid = page.data[0]
    assert grid.baseline.status == BaselineStatus.widely
    assert grid.get_browser_implementation("chrome").status == BrowserImplementationStatus.available
    assert grid.get_browser_implementation("chrome").version == "57"
    assert grid.get_wpt_snapshot("stable", "chrome").score == 0.98
    assert grid.get_wpt_snapshot("stable", "chrome").metadata == {"status": "C"}
    assert grid.get_wpt_snapshot("experimental", "chrome") is None
    assert page.data[1].baseline is None

    request = httpx_mock.get_request()
    assert request.url.path == "/v1/features"
    params = URL(request.url).params
    assert params["q"] == "name:grid"
    assert params["sort"] == "name_asc"
    assert params["offset"] == "50"
    assert params["page_size"] == "50"


def test_list_features_without_query(httpx_mock):
    httpx_mock.add_response(method="GET", json={"metadata": {}, "data": []})

    page = list_features()
    assert page.data == []
    assert page.metadata.total is None

    params = URL(httpx_mock.get_request().url).params
    assert "q" not in params
    assert "sort" not in params
    assert params["page_size"] == "25"
    assert params["offset"] == "0"


def test_list_features_server_error(httpx_mock):
    httpx_mock.add_response(method="GET", status_code=500)

    with pytest.raises(WebStatusAPIError) as exc_info:
        list_features()
    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)


def test_list_features_connection_error(httpx_mock):
    httpx_mock.add_exception(httpx.ConnectError("connection refused"))

    with pytest.raises(WebStatusAPIError):
        list_features()


def test_get_feature(httpx_mock):
    httpx_mock.add_response(
        method="GET",
        url="http://webstatus.test/v1/features/grid",
        json={"feature_id": "grid", "name": "Grid", "spec": {"links": [{"link": "https://drafts.csswg.org/"}]}},
    )

    feature = get_feature("grid")
    assert feature.name == "Grid"
    assert feature.spec.links[0].link == "https://drafts.csswg.org/"


def test_get_feature_not_found(httpx_mock):
    httpx_mock.add_response(method="GET", status_code=404, json={"code": 404, "message": "not found"})
    assert get_feature("nope") is None


def test_get_feature_server_error(httpx_mock):
    httpx_mock.add_response(method="GET", status_code=503)
    with pytest.raises(WebStatusAPIError):
        get_feature("grid")


def test_list_missing_one_implementation_counts(httpx_mock):
    httpx_mock.add_response(
        method="GET",
        json={
            "metadata": {"next_page_token": "next"},
            "data": [
                {"event_date": "2024-01-01", "count": 12},
                {"event_date": "2024-01-02", "count": 10},
            ],
        },
    )

    page = list_missing_one_implementation_counts(
        "chrome",
        ["edge", "firefox"],
        datetime.date(2024, 1, 1),
        datetime.date(2024, 2, 1),
        page_size=500,
        page_token="token",
    )
    assert page.asdict() == {
        "metadata": {"next_page_token": "next"},
        "data": [
            {"event_date": "2024-01-01", "count": 12},
            {"event_date": "2024-01-02", "count": 10},
        ],
    }

    request = httpx_mock.get_request()
    assert request.url.path == "/v1/stats/features/browsers/chrome/missing_one_implementation_counts"
    params = URL(request.url).params
    assert params.get_list("browser") == ["edge", "firefox"]
    assert params["startAt"] == "2024-01-01"
    assert params["endAt"] == "2024-02-01"
    assert params["page_size"] == "100"
    assert params["page_token"] == "token"


def test_list_missing_one_implementation_counts_default_page_size(httpx_mock):
    httpx_mock.add_response(method="GET", json={"metadata": {}, "data": []})

    page = list_missing_one_implementation_counts("safari", [], datetime.date(2024, 1, 1), datetime.date(2024, 1, 2))
    assert page.asdict() == {"metadata": {}, "data": []}

    params = URL(httpx_mock.get_request().url).params
    assert params["page_size"] == "100"
    assert "page_token" not in params
    assert "browser" not in params
