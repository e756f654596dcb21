"""
Credit-card billing cycle arithmetic.

A card closes its cycle on closing_day. Anything spent on or before
that day is billed on the next month's due day; anything after it
waits one more cycle.

Dates are plain ``datetime.date`` values. They carry no time of day,
so no time-zone conversion can shift a due date by one day.

When the requested day does not exist in the target month (day 31 in
April, day 30 in February) the MonthOverflowPolicy decides:
CLAMP moves it to the last day of that month, ROLL_OVER spills the
extra days into the following month.
"""

from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from solar_ledger.config import get_settings
from solar_ledger.models.enums import MonthOverflowPolicy


def default_policy() -> MonthOverflowPolicy:
    return MonthOverflowPolicy(get_settings().MONTH_OVERFLOW_POLICY)


def build_date(
    year: int,
    month: int,
    day: int,
    policy: MonthOverflowPolicy | None = None,
) -> date:
    """
    Build a date, resolving a day past the end of the month.

    month may be outside 1..12; it is normalized into the year.
    """
    policy = policy or default_policy()
    # relativedelta(day=...) already stops at the last day of the month.
    target = date(year, 1, 1) + relativedelta(months=month - 1, day=day)
    if policy == MonthOverflowPolicy.ROLL_OVER and target.day < day:
        target += timedelta(days=day - target.day)
    return target


def add_months(
    value: date,
    months: int,
    policy: MonthOverflowPolicy | None = None,
    day: int | None = None,
) -> date:
    """
    Advance a date by a number of calendar months.

    Keeps the day of month (or ``day`` when given, used to keep a
    card's due day across a series that was clamped once).
    """
    month_start = value.replace(day=1) + relativedelta(months=months)
    return build_date(
        month_start.year, month_start.month, day or value.day, policy
    )


def compute_due_date(
    expense_date: date,
    closing_day: int,
    due_day: int,
    policy: MonthOverflowPolicy | None = None,
) -> date:
    """
    Due date of the invoice that will carry an expense.

    >>> compute_due_date(date(2024, 3, 10), 15, 10)
    datetime.date(2024, 4, 10)
    >>> compute_due_date(date(2024, 3, 20), 15, 10)
    datetime.date(2024, 5, 10)
    """
    months_ahead = 1 if expense_date.day <= closing_day else 2
    return add_months(expense_date, months_ahead, policy, day=due_day)
