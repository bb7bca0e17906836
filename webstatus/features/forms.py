from django import forms

from webstatus.features.cells import CELL_DEFS
from webstatus.features.columns import (
    format_column_options,
    format_columns_spec,
    parse_column_options,
    parse_columns_spec,
)
from webstatus.features.query import RouterLocation, get_column_options, get_columns_spec

CHECKBOX_CLASS = "checkbox"


def get_column_choices():
    return [(str(column_key), col_def.name_in_dialog) for column_key, col_def in CELL_DEFS.items()]


def get_column_option_choices():
    return [
        (str(option.column_option_key), option.name_in_dialog)
        for col_def in CELL_DEFS.values()
        for option in col_def.options.column_options
    ]


class ColumnSettingsForm(forms.Form):
    """Choose the overview columns and their extra displays.

    The form is submitted with GET and only ever produces query string values, it
    stores nothing.
    """

    columns = forms.MultipleChoiceField(
        choices=get_column_choices,
        widget=forms.CheckboxSelectMultiple(attrs={"class": CHECKBOX_CLASS}),
    )
    column_options = forms.MultipleChoiceField(
        choices=get_column_option_choices,
        required=False,
        widget=forms.CheckboxSelectMultiple(attrs={"class": CHECKBOX_CLASS}),
    )

    @classmethod
    def initial_from_location(cls, location: RouterLocation):
        return {
            "columns": [str(key) for key in parse_columns_spec(get_columns_spec(location))],
            "column_options": [str(key) for key in parse_column_options(get_column_options(location))],
        }

    def get_query_overrides(self):
        return {
            "columns": format_columns_spec(parse_columns_spec(",".join(self.cleaned_data["columns"]))),
            "column_options": format_column_options(
                parse_column_options(",".join(self.cleaned_data["column_options"]))
            )
            or None,
            "start": 0,
        }
