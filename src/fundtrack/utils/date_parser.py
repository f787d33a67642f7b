"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("this-month", "last-month", "this-year", "last-year", "this-week", "last-week")


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse a date string into a date object.

    Supports ISO and free-form dates ("2024-01-15", "Jan 15 2024") as well
    as "today", "yesterday", "tomorrow" and "this/last month|year|week",
    which resolve to the first day of that period.

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    relative_days = {"today": 0, "yesterday": -1, "tomorrow": 1}
    if text in relative_days:
        return today + timedelta(days=relative_days[text])

    words = text.split()
    if len(words) == 2 and words[0] in ("this", "last"):
        start, _ = get_date_range(f"{words[0]}-{words[1]}", today=today)
        return start

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: date | None = None) -> tuple[date, date]:
    """Get inclusive start and end dates for a named period.

    Current periods end today; past periods end on their last day.

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "this-month":
        return today.replace(day=1), today
    if period == "last-month":
        first_this_month = today.replace(day=1)
        return first_this_month - relativedelta(months=1), first_this_month - timedelta(days=1)
    if period == "this-year":
        return today.replace(month=1, day=1), today
    if period == "last-year":
        first_this_year = today.replace(month=1, day=1)
        return first_this_year - relativedelta(years=1), first_this_year - timedelta(days=1)
    if period == "this-week":
        return today - timedelta(days=today.weekday()), today
    if period == "last-week":
        start = today - timedelta(days=today.weekday() + 7)
        return start, start + timedelta(days=6)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
