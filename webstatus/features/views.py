import logging

from django.http import Http404, HttpResponseRedirect, JsonResponse
from django.shortcuts import render
from django.urls import reverse
from django.utils.dateparse import parse_date
from django.views.decorators.http import require_GET
from django.views.generic import TemplateView
from django_tables2 import SingleTableView

from webstatus.features.columns import BROWSER_CHANNEL_COLUMN_KEYS, ColumnKey, parse_columns_spec
from webstatus.features.forms import ColumnSettingsForm
from webstatus.features.query import (
    CONTEXTUAL_PARAMS,
    DEFAULT_SORT_SPEC,
    RouterLocation,
    format_overview_page_url,
    get_columns_spec,
    get_page_size,
    get_pagination_start,
    get_search_query,
    get_sort_spec,
    normalize_sort_spec,
)
from webstatus.features.tables import FeatureOverviewTable
from webstatus.webstatus_client import (
    WebStatusAPIError,
    get_feature,
    list_features,
    list_missing_one_implementation_counts,
)
from webstatus.webstatus_client.models import Browser

logger = logging.getLogger(__name__)

FEATURE_LIST_ERROR = "Unable to load features. Please try again later."
MISSING_ONE_IMPLEMENTATION_ERROR = "unable to get missing one implementation metrics"


class LocationMixin:
    def get_location(self) -> RouterLocation:
        if not hasattr(self, "_location"):
            self._location = RouterLocation.from_request(self.request)
        return self._location


class FeatureOverview(LocationMixin, SingleTableView):
    table_class = FeatureOverviewTable
    template_name = "features/overview.html"
    table_pagination = False

    def get_sort_spec(self):
        sort_spec = get_sort_spec(self.get_location())
        normalized = normalize_sort_spec(sort_spec)
        if normalized is None:
            logger.warning(f"Ignoring unknown sort spec '{sort_spec}'")
            return DEFAULT_SORT_SPEC
        return normalized

    def get_feature_page(self):
        if not hasattr(self, "_feature_page"):
            location = self.get_location()
            try:
                self._feature_page = list_features(
                    query=get_search_query(location),
                    sort=self.get_sort_spec(),
                    start=get_pagination_start(location),
                    page_size=get_page_size(location),
                )
            except WebStatusAPIError:
                self._feature_page = None
        return self._feature_page

    def get_queryset(self):
        page = self.get_feature_page()
        return page.data if page else []

    def get_table_kwargs(self):
        kwargs = super().get_table_kwargs()
        location = self.get_location()
        kwargs["location"] = location
        kwargs["columns"] = parse_columns_spec(get_columns_spec(location))
        return kwargs

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        location = self.get_location()
        page = self.get_feature_page()
        start = get_pagination_start(location)
        page_size = get_page_size(location)
        total = (page.metadata.total if page else None) or 0

        context.update(
            {
                "search_query": get_search_query(location),
                "error": None if page else FEATURE_LIST_ERROR,
                "total": total,
                "start": start,
                "page_size": page_size,
                "previous_url": (
                    format_overview_page_url(location, start=max(start - page_size, 0)) if start > 0 else None
                ),
                "next_url": (
                    format_overview_page_url(location, start=start + page_size) if start + page_size < total else None
                ),
                "column_settings_url": _with_location("features:column_settings", location),
            }
        )
        return context


def _with_location(url_name, location: RouterLocation):
    path = reverse(url_name)
    return f"{path}?{location.search.lstrip('?')}" if location.search else path


class FeatureDetail(LocationMixin, TemplateView):
    template_name = "features/feature_detail.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        feature = get_feature(self.kwargs["feature_id"])
        if feature is None:
            raise Http404(f"Feature '{self.kwargs['feature_id']}' not found")

        location = self.get_location()
        context["feature"] = feature
        context["table"] = FeatureOverviewTable(
            [feature],
            location=location,
            columns=[ColumnKey.BASELINE_STATUS, *BROWSER_CHANNEL_COLUMN_KEYS],
        )
        context["overview_url"] = format_overview_page_url(location)
        return context


@require_GET
def column_settings(request):
    location = RouterLocation.from_request(request)
    if "apply" in request.GET:
        form = ColumnSettingsForm(request.GET)
        if form.is_valid():
            return HttpResponseRedirect(format_overview_page_url(location, apply=None, **form.get_query_overrides()))
    else:
        form = ColumnSettingsForm(initial=ColumnSettingsForm.initial_from_location(location))

    hidden_params = [
        (key, value)
        for key in CONTEXTUAL_PARAMS
        if key not in ("columns", "column_options", "start")
        for value in location.params.getlist(key)
    ]
    return render(
        request,
        "features/column_settings.html",
        {"form": form, "hidden_params": hidden_params, "overview_url": format_overview_page_url(location)},
    )


def _bad_request(message):
    return JsonResponse({"code": 400, "message": message}, status=400)


@require_GET
def missing_one_implementation_counts(request, browser):
    browsers = {str(b) for b in Browser}
    other_browsers = request.GET.getlist("browser")
    if browser not in browsers or any(other not in browsers for other in other_browsers):
        return _bad_request("unknown browser")

    try:
        start_at = parse_date(request.GET.get("startAt", ""))
        end_at = parse_date(request.GET.get("endAt", ""))
    except ValueError:
        return _bad_request("startAt and endAt must be valid dates")
    if start_at is None or end_at is None:
        return _bad_request("startAt and endAt are required dates in YYYY-MM-DD format")

    page_size = request.GET.get("page_size")
    if page_size is not None:
        try:
            page_size = int(page_size)
        except ValueError:
            return _bad_request("page_size must be an integer")
        if page_size < 1:
            return _bad_request("page_size must be positive")

    try:
        page = list_missing_one_implementation_counts(
            browser,
            other_browsers,
            start_at,
            end_at,
            page_size=page_size,
            page_token=request.GET.get("page_token"),
        )
    except WebStatusAPIError:
        logger.error("unable to get missing one implementation count", exc_info=True)
        return JsonResponse({"code": 500, "message": MISSING_ONE_IMPLEMENTATION_ERROR}, status=500)

    return JsonResponse(page.asdict())
