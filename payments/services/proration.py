"""
Proration: reduce a paid cycle to the sessions actually attended.

Only run on explicit admin action (payment adjust / student withdrawal);
attendance changes never trigger it.
"""
import logging
from collections import namedtuple
from decimal import ROUND_HALF_UP, Decimal

from core.utils import format_currency
from payments.models import PaymentRecord
from payments.services.cycle import sessions_for_cycle

logger = logging.getLogger(__name__)

ProrationResult = namedtuple(
    "ProrationResult",
    ["original_amount", "adjusted_amount", "planned_sessions", "actual_sessions", "adjusted"],
)


def adjusted_amount(original_amount, planned_sessions, actual_sessions):
    """
    round_half_up(original / planned * actual) when fewer sessions were attended
    than planned; otherwise the original amount. planned <= 0 returns the original.
    """
    if not planned_sessions or planned_sessions <= 0:
        return original_amount
    if actual_sessions is None or actual_sessions >= planned_sessions:
        return original_amount
    per_session = Decimal(original_amount) / Decimal(planned_sessions)
    amount = (per_session * Decimal(actual_sessions)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(amount)


def is_prorated(payment):
    """True once a payment has been adjusted below its planned sessions."""
    return (
        payment.actual_sessions is not None
        and payment.planned_sessions is not None
        and payment.actual_sessions < payment.planned_sessions
    )


def apply_proration(payment, actual_sessions, planned_sessions=None, reason="", save=True):
    """
    Prorate a PaymentRecord in place.
    planned_sessions defaults to the payment's own value, then to the student's cycle.
    When the amount drops: status -> partial_refund, description appended to adjustment_reason,
    original amount appended to notes.
    """
    planned = planned_sessions if planned_sessions is not None else payment.planned_sessions
    if planned is None:
        planned = sessions_for_cycle(payment.student.effective_payment_cycle)

    original = payment.amount
    new_amount = adjusted_amount(original, planned, actual_sessions)
    payment.planned_sessions = planned
    payment.actual_sessions = actual_sessions

    adjusted = new_amount < original
    if adjusted:
        payment.amount = new_amount
        payment.status = PaymentRecord.STATUS_PARTIAL_REFUND
        description = f"Adjusted: {actual_sessions}/{planned} sessions. {reason}".strip()
        payment.adjustment_reason = (
            f"{payment.adjustment_reason}\n{description}" if payment.adjustment_reason else description
        )
        note = f"Điều chỉnh học phí. Học phí ban đầu: {format_currency(original)}"
        payment.notes = f"{payment.notes}\n{note}" if payment.notes else note

    logger.info(
        f"[proration] payment_id={payment.pk}, planned={planned}, actual={actual_sessions}, "
        f"amount {original} -> {new_amount}, adjusted={adjusted}"
    )
    if save:
        payment.save()
    return ProrationResult(original, new_amount, planned, actual_sessions, adjusted)
