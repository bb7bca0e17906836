import datetime

from dateutil.relativedelta import relativedelta
from django.utils.dateparse import parse_date, parse_datetime
from django.utils.timezone import is_aware, localtime

ISO_DATE_FORMAT = "%Y-%m-%d"


def to_local_date(value: str | datetime.date) -> datetime.date:
    """Resolve a stored date value to a calendar date in the current time zone.

    Date-only strings are calendar dates and are never shifted. Timestamps that
    carry an offset are converted to local time before the date is taken.
    """
    if isinstance(value, str):
        parsed = parse_date(value)
        if parsed is None:
            parsed = parse_datetime(value)
        if parsed is None:
            raise ValueError(f"'{value}' is not a valid date")
        value = parsed

    if isinstance(value, datetime.datetime):
        if is_aware(value):
            value = localtime(value)
        return value.date()
    return value


def format_date(value: str | datetime.date) -> str:
    date = to_local_date(value)
    return f"{date.year:04d}-{date.month:02d}-{date.day:02d}"


def add_months(value: str | datetime.date, months: int) -> datetime.date:
    # days past the end of a shorter target month roll over into the next month
    date = to_local_date(value)
    first_of_month = date.replace(day=1) + relativedelta(months=months)
    return first_of_month + relativedelta(days=date.day - 1)
