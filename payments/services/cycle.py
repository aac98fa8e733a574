"""
Payment cycle calendar: cycle codes, planned session counts and cycle end dates.

end_of_cycle() is a heuristic: session-based cycles assume exactly two
sessions per week and never consult the class timetable, so real session
dates may differ.
"""
from calendar import monthrange
from datetime import timedelta

CYCLE_MONTHLY = "1-thang"
CYCLE_EIGHT_SESSIONS = "8-buoi"
CYCLE_TEN_SESSIONS = "10-buoi"
CYCLE_PER_DAY = "theo-ngay"

PAYMENT_CYCLE_CHOICES = [
    (CYCLE_MONTHLY, "1 tháng"),
    (CYCLE_EIGHT_SESSIONS, "8 buổi"),
    (CYCLE_TEN_SESSIONS, "10 buổi"),
    (CYCLE_PER_DAY, "Theo ngày"),
]
PAYMENT_CYCLES = tuple(code for code, _ in PAYMENT_CYCLE_CHOICES)
DEFAULT_CYCLE = CYCLE_MONTHLY

# Planned sessions per cycle; a month is assumed to hold 4 sessions.
SESSIONS_PER_CYCLE = {
    CYCLE_MONTHLY: 4,
    CYCLE_EIGHT_SESSIONS: 8,
    CYCLE_TEN_SESSIONS: 10,
    CYCLE_PER_DAY: 1,
}

# Weeks covered by session-based cycles at 2 sessions/week.
_CYCLE_WEEKS = {
    CYCLE_EIGHT_SESSIONS: 4,
    CYCLE_TEN_SESSIONS: 5,
}


def normalize_cycle(cycle):
    """Unknown or empty cycle codes fall back to monthly."""
    return cycle if cycle in SESSIONS_PER_CYCLE else DEFAULT_CYCLE


def sessions_for_cycle(cycle):
    return SESSIONS_PER_CYCLE[normalize_cycle(cycle)]


def add_months(start_date, months):
    """Calendar month arithmetic; the day is clamped to the target month's length."""
    month_index = start_date.month - 1 + months
    year = start_date.year + month_index // 12
    month = month_index % 12 + 1
    _, last_day = monthrange(year, month)
    return start_date.replace(year=year, month=month, day=min(start_date.day, last_day))


def end_of_cycle(start_date, cycle):
    """
    Last day (inclusive) covered by a cycle starting on start_date.
    - 1-thang:   start + 1 month - 1 day  (2024-01-01 -> 2024-01-31)
    - 8-buoi:    start + 4 weeks - 1 day
    - 10-buoi:   start + 5 weeks - 1 day
    - theo-ngay: start + 6 days (one-week window)
    Unknown cycles behave as monthly.
    """
    cycle = normalize_cycle(cycle)
    if cycle == CYCLE_PER_DAY:
        return start_date + timedelta(days=6)
    if cycle in _CYCLE_WEEKS:
        return start_date + timedelta(days=_CYCLE_WEEKS[cycle] * 7 - 1)
    return add_months(start_date, 1) - timedelta(days=1)


def format_payment_cycle(cycle):
    return dict(PAYMENT_CYCLE_CHOICES).get(cycle, cycle or "")
