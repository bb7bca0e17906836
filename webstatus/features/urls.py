from django.urls import path

from webstatus.features import views

app_name = "features"

urlpatterns = [
    path("", view=views.FeatureOverview.as_view(), name="overview"),
    path("features/<str:feature_id>", view=views.FeatureDetail.as_view(), name="detail"),
    path("columns", view=views.column_settings, name="column_settings"),
    path(
        "api/browsers/<str:browser>/missing_one_implementation_counts",
        view=views.missing_one_implementation_counts,
        name="missing_one_implementation_counts",
    ),
]
