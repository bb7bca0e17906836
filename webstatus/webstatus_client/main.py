import datetime
import logging

import httpx
import sentry_sdk
from django.conf import settings
from httpx import Response

from webstatus.utils.datetime import ISO_DATE_FORMAT
from webstatus.utils.tables import DEFAULT_PAGE_SIZE
from webstatus.webstatus_client.models import Feature, FeaturePage, MissingOneImplementationPage

logger = logging.getLogger(__name__)

GET = "GET"

DEFAULT_COUNTS_PAGE_SIZE = 100
MAX_COUNTS_PAGE_SIZE = 100


class WebStatusAPIError(Exception):
    """Exception raised when the webstatus backend cannot be reached or returns an error."""

    pass


def list_features(
    query: str = "", sort: str | None = None, start: int = 0, page_size: int = DEFAULT_PAGE_SIZE
) -> FeaturePage:
    params = {"page_size": page_size, "offset": start}
    if query:
        params["q"] = query
    if sort:
        params["sort"] = sort
    response = _make_request(GET, "/v1/features", params=params)
    return FeaturePage.build(**response.json())


def get_feature(feature_id: str) -> Feature | None:
    try:
        response = _make_request(GET, f"/v1/features/{feature_id}")
    except WebStatusAPIError as e:
        if isinstance(e.__cause__, httpx.HTTPStatusError) and e.__cause__.response.status_code == 404:
            return None
        raise
    return Feature.build(**response.json())


def get_counts_page_size(page_size: int | None) -> int:
    if page_size is None:
        return DEFAULT_COUNTS_PAGE_SIZE
    return min(page_size, MAX_COUNTS_PAGE_SIZE)


def list_missing_one_implementation_counts(
    browser: str,
    other_browsers: list[str],
    start_at: datetime.date,
    end_at: datetime.date,
    page_size: int | None = None,
    page_token: str | None = None,
) -> MissingOneImplementationPage:
    """Fetch the number of features missing in exactly one browser over a date range.

    ``browser`` is the reference browser and ``other_browsers`` the set it is compared
    against. The backend owns the pagination contract, ``page_token`` is passed through
    untouched.
    """
    params = {
        "browser": other_browsers,
        "startAt": start_at.strftime(ISO_DATE_FORMAT),
        "endAt": end_at.strftime(ISO_DATE_FORMAT),
        "page_size": get_counts_page_size(page_size),
    }
    if page_token:
        params["page_token"] = page_token
    response = _make_request(
        GET, f"/v1/stats/features/browsers/{browser}/missing_one_implementation_counts", params=params
    )
    return MissingOneImplementationPage.build(**response.json())


def _make_request(method, path, params=None, timeout=None) -> Response:
    url = f"{settings.WEBSTATUS_API_URL.rstrip('/')}{path}"
    logger.debug(f"{method} {url} with params: {params}")
    try:
        response = httpx.request(
            method, url, params=params, timeout=timeout or settings.WEBSTATUS_API_TIMEOUT
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 404:
            logger.info(f"{url} not found")
        else:
            sentry_sdk.capture_exception(e)
            logger.error(f"Request to {url} failed with status {e.response.status_code}")
        raise WebStatusAPIError(f"Request to {path} failed: {e}") from e
    except httpx.HTTPError as e:
        sentry_sdk.capture_exception(e)
        logger.error(f"Request to {url} failed: {e}", exc_info=True)
        raise WebStatusAPIError(f"Request to {path} failed: {e}") from e
    return response
