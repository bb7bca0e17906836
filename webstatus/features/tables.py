import django_tables2 as tables

from webstatus.features.cells import CELL_DEFS, render_feature_cell, render_header_cell
from webstatus.features.columns import DEFAULT_COLUMNS, ColumnKey
from webstatus.features.query import DEFAULT_SORT_SPEC, RouterLocation, get_sort_spec, normalize_sort_spec
from webstatus.utils.tables import CLICK_TO_SORT_ATTR, merge_attrs


class FeatureColumn(tables.Column):
    """A django-tables2 column backed by an entry of ``CELL_DEFS``.

    Sorting is handled by the backend through the ``sort`` query parameter, the
    header links to the next sort spec instead of using django-tables2 ordering.
    """

    def __init__(self, column_key: ColumnKey, location: RouterLocation, sort_spec: str, **kwargs):
        self.column_key = column_key
        self.location = location
        self.sort_spec = sort_spec
        kwargs.setdefault("accessor", "feature_id")
        kwargs.setdefault("verbose_name", CELL_DEFS[column_key].name_in_dialog)
        kwargs.setdefault("empty_values", ())
        kwargs.setdefault("orderable", False)
        kwargs["attrs"] = merge_attrs(
            CLICK_TO_SORT_ATTR, {"td": {"class": f"col-{column_key}"}}, kwargs.get("attrs", {})
        )
        super().__init__(**kwargs)

    @property
    def header(self):
        return render_header_cell(self.location, self.column_key, self.sort_spec)

    def render(self, record):
        content = render_feature_cell(record, self.location, self.column_key)
        return "" if content is None else content


class FeatureOverviewTable(tables.Table):
    def __init__(self, data, location: RouterLocation | None = None, columns=DEFAULT_COLUMNS, **kwargs):
        self.location = location or RouterLocation()
        self.sort_spec = normalize_sort_spec(get_sort_spec(self.location)) or DEFAULT_SORT_SPEC
        self.column_keys = list(columns)
        kwargs["extra_columns"] = [
            (str(column_key), FeatureColumn(column_key, self.location, self.sort_spec))
            for column_key in self.column_keys
        ]
        kwargs.setdefault("sequence", [str(column_key) for column_key in self.column_keys])
        super().__init__(data, **kwargs)

    class Meta:
        attrs = {"class": "table data-table overview-table"}
        empty_text = "No features found."
        orderable = False
