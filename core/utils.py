"""
Core utilities: calendar-day parsing and currency formatting.
"""
from datetime import date, datetime


def parse_iso_date(value, default=None):
    """
    Parse a YYYY-MM-DD boundary value into a local calendar date.
    Longer ISO strings are truncated to the date part; unparseable input returns default.
    """
    if value is None or value == "":
        return default
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value)[:10], "%Y-%m-%d").date()
    except (ValueError, TypeError):
        return default


def format_currency(amount):
    """480000 -> '480.000 VND' (vi-VN grouping, no decimals)."""
    try:
        value = int(round(float(amount or 0)))
    except (TypeError, ValueError):
        value = 0
    return f"{value:,}".replace(",", ".") + " VND"
