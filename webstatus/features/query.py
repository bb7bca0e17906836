"""
Reading and writing the overview page configuration from the query string.

Everything the overview table needs (search, columns, column options, sort and
pagination) round-trips through the URL, so a view can be bookmarked or shared.
"""

import dataclasses
from enum import StrEnum

from django.http import QueryDict
from django.urls import reverse

from webstatus.features.columns import ColumnKey, resolve_column_key
from webstatus.utils.tables import get_validated_offset, get_validated_page_size

DEFAULT_SORT_SPEC = "baseline_status_desc"

# query string parameters that are carried over when leaving the overview page
CONTEXTUAL_PARAMS = ("q", "sort", "start", "num", "columns", "column_options")


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclasses.dataclass(frozen=True)
class RouterLocation:
    search: str = ""

    @classmethod
    def from_request(cls, request):
        return cls(request.META.get("QUERY_STRING", ""))

    @property
    def params(self) -> QueryDict:
        return QueryDict(self.search.lstrip("?"))


@dataclasses.dataclass(frozen=True)
class SortSpec:
    column: ColumnKey
    direction: SortDirection

    def __str__(self):
        return format_sort_spec(self.column, self.direction)


def get_search_query(location: RouterLocation) -> str:
    return location.params.get("q", "")


def get_columns_spec(location: RouterLocation) -> str:
    return location.params.get("columns", "")


def get_column_options(location: RouterLocation) -> str:
    return location.params.get("column_options", "")


def get_sort_spec(location: RouterLocation) -> str:
    return location.params.get("sort") or DEFAULT_SORT_SPEC


def get_pagination_start(location: RouterLocation) -> int:
    return get_validated_offset(location.params.get("start"))


def get_page_size(location: RouterLocation) -> int:
    return get_validated_page_size(location.params.get("num"))


def format_sort_spec(column: ColumnKey, direction: SortDirection) -> str:
    return f"{column}_{direction}"


def parse_sort_spec(spec: str | None) -> SortSpec | None:
    column, _, direction = (spec or "").strip().lower().rpartition("_")
    column_key = resolve_column_key(column)
    if column_key is None or direction not in (SortDirection.ASC, SortDirection.DESC):
        return None
    return SortSpec(column_key, SortDirection(direction))


def normalize_sort_spec(spec: str | None) -> str | None:
    """Lower-case form of a valid sort spec, None when it does not parse."""
    sort_spec = parse_sort_spec(spec)
    return str(sort_spec) if sort_spec else None


def next_sort_spec(column: ColumnKey, sort_spec: str) -> str:
    """Sort spec to apply when the header of ``column`` is clicked.

    Ascending only flips to descending for the column that is currently sorted
    ascending. Every other state, including descending, goes back to ascending.
    """
    if sort_spec == format_sort_spec(column, SortDirection.ASC):
        return format_sort_spec(column, SortDirection.DESC)
    return format_sort_spec(column, SortDirection.ASC)


def _with_query_string(path: str, params: QueryDict) -> str:
    query_string = params.urlencode()
    return f"{path}?{query_string}" if query_string else path


def format_overview_page_url(location: RouterLocation | None = None, **overrides) -> str:
    params = (location or RouterLocation()).params.copy()
    for key, value in overrides.items():
        if value is None:
            params.pop(key, None)
        else:
            params[key] = str(value)
    return _with_query_string(reverse("features:overview"), params)


def format_feature_page_url(feature, location: RouterLocation | None = None) -> str:
    current = (location or RouterLocation()).params
    params = QueryDict(mutable=True)
    for key in CONTEXTUAL_PARAMS:
        if key in current:
            params.setlist(key, current.getlist(key))
    return _with_query_string(reverse("features:detail", kwargs={"feature_id": feature.feature_id}), params)
