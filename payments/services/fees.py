"""
Fee calculator. The calculation mode (PER_SESSION | PER_CYCLE) comes from the
Setting store; callers read it once and pass it in.
"""
from core.services import FEE_METHOD_PER_CYCLE, FEE_METHOD_PER_SESSION
from core.utils import format_currency
from payments.services.cycle import (
    CYCLE_EIGHT_SESSIONS,
    CYCLE_MONTHLY,
    CYCLE_PER_DAY,
    CYCLE_TEN_SESSIONS,
    sessions_for_cycle,
)


def _as_int(value):
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def cycle_fee(base_fee, cycle, mode=FEE_METHOD_PER_SESSION):
    """
    Amount due for one cycle.
    PER_SESSION: base_fee is the price of one session -> base_fee * sessions in cycle.
    PER_CYCLE:   base_fee already is the whole cycle price.
    """
    fee = _as_int(base_fee)
    if mode == FEE_METHOD_PER_CYCLE:
        return fee
    return fee * sessions_for_cycle(cycle)


def format_fee_display(base_fee, cycle, mode=FEE_METHOD_PER_SESSION):
    """Human readable fee label as shown on class listings."""
    fee = _as_int(base_fee)
    if mode == FEE_METHOD_PER_SESSION:
        if cycle == CYCLE_PER_DAY:
            return f"{format_currency(fee)} / ngày"
        sessions = sessions_for_cycle(cycle)
        label = f"{format_currency(fee)} / buổi"
        if sessions > 1:
            label += f" (Tổng: {format_currency(cycle_fee(fee, cycle, mode))})"
        return label

    suffix = {
        CYCLE_EIGHT_SESSIONS: " / 8 buổi",
        CYCLE_TEN_SESSIONS: " / 10 buổi",
        CYCLE_MONTHLY: " / tháng",
        CYCLE_PER_DAY: " / ngày",
    }.get(cycle, "")
    return format_currency(fee) + suffix
