from webstatus.features.forms import ColumnSettingsForm, get_column_choices, get_column_option_choices
from webstatus.features.query import RouterLocation


def test_column_choices():
    choices = get_column_choices()
    assert len(choices) == 10
    assert choices[0] == ("name", "Feature name")
    assert ("experimental_chrome", "Browser Implementation in Chrome Experimental") in choices


def test_column_option_choices():
    assert get_column_option_choices() == [
        ("baseline_status_low_date", "Show Baseline status low date"),
        ("baseline_status_high_date", "Show Baseline status high date"),
    ]


def test_initial_defaults():
    initial = ColumnSettingsForm.initial_from_location(RouterLocation())
    assert initial["columns"] == [
        "name",
        "baseline_status",
        "stable_chrome",
        "stable_edge",
        "stable_firefox",
        "stable_safari",
    ]
    assert initial["column_options"] == []


def test_query_overrides():
    form = ColumnSettingsForm(
        {"columns": ["stable_safari", "name"], "column_options": ["baseline_status_low_date"]}
    )
    assert form.is_valid()
    assert form.get_query_overrides() == {
        "columns": "stable_safari,name",
        "column_options": "baseline_status_low_date",
        "start": 0,
    }


def test_unknown_column_is_invalid():
    form = ColumnSettingsForm({"columns": ["popularity"]})
    assert not form.is_valid()
    assert "columns" in form.errors
