"""
Payment status resolution from payment history and calendar state.

resolve_status():   latest-payment rule used by listings and the parent portal.
payment_standing(): per-student detail policy with the 7/14 day grace windows
                    and outstanding amounts.
Neither raises on missing or malformed data.
"""
from collections import namedtuple
from datetime import timedelta

from core.services import DEFAULT_FEE_METHOD
from payments.models import PaymentRecord
from payments.services.cycle import CYCLE_PER_DAY, end_of_cycle, normalize_cycle
from payments.services.fees import cycle_fee

# Days after valid_to before an expired cycle counts as overdue.
PAYMENT_GRACE_DAYS = 7
# Days after registration before a never-paid student counts as overdue.
REGISTRATION_GRACE_DAYS = 14

STATUS_INACTIVE = "inactive"

PaymentStatusResult = namedtuple(
    "PaymentStatusResult", ["status", "next_due_from", "next_due_to", "latest_payment"]
)
PaymentStanding = namedtuple(
    "PaymentStanding", ["status", "due_amount", "unpaid_amount", "overdue_amount"]
)


def student_cycle(student):
    cycle = getattr(student, "effective_payment_cycle", None) or getattr(student, "payment_cycle", None)
    return normalize_cycle(cycle)


def latest_payment(payments):
    """Payment with the latest valid_to, or None."""
    dated = [p for p in (payments or []) if getattr(p, "valid_to", None)]
    if not dated:
        return None
    return max(dated, key=lambda p: p.valid_to)


def resolve_status(student, payments, today):
    """
    - no payments: pending, next due [today, end_of_cycle(today)]
    - latest still valid (today <= valid_to): latest.status, no next due
    - expired: overdue, except per-day students (paid if latest was paid, else pending);
      next due starts the day after valid_to
    """
    cycle = student_cycle(student)
    latest = latest_payment(payments)
    if latest is None:
        return PaymentStatusResult(PaymentRecord.STATUS_PENDING, today, end_of_cycle(today, cycle), None)

    if latest.is_current(today):
        return PaymentStatusResult(latest.status or PaymentRecord.STATUS_PENDING, None, None, latest)

    if cycle == CYCLE_PER_DAY:
        status = (
            PaymentRecord.STATUS_PAID
            if latest.status == PaymentRecord.STATUS_PAID
            else PaymentRecord.STATUS_PENDING
        )
    else:
        status = PaymentRecord.STATUS_OVERDUE
    next_from = latest.valid_to + timedelta(days=1)
    return PaymentStatusResult(status, next_from, end_of_cycle(next_from, cycle), latest)


def payment_standing(student, class_offering, payments, today, mode=DEFAULT_FEE_METHOD):
    """
    Outstanding amounts for one student.
    - student not active: inactive, nothing due
    - missing class or fee: nothing due, pending unless a payment is still valid
    - unpaid: a full cycle fee once the latest payment has expired (or none exists)
    - overdue: expired PAYMENT_GRACE_DAYS or more days ago, or never paid
      REGISTRATION_GRACE_DAYS or more days after registration; per-day students are never overdue
    """
    if student is None or not getattr(student, "is_active", False):
        return PaymentStanding(STATUS_INACTIVE, 0, 0, 0)

    latest = latest_payment(payments)
    current = latest is not None and latest.is_current(today)
    fee = getattr(class_offering, "fee", None) if class_offering is not None else None
    cycle = student_cycle(student)
    due = cycle_fee(fee, cycle, mode) if fee else 0

    if not due:
        status = latest.status if current else PaymentRecord.STATUS_PENDING
        return PaymentStanding(status, 0, 0, 0)

    unpaid = 0 if current else due
    overdue = 0
    if cycle != CYCLE_PER_DAY:
        if latest is not None:
            if today >= latest.valid_to + timedelta(days=PAYMENT_GRACE_DAYS):
                overdue = due
        else:
            registered = getattr(student, "registration_date", None)
            if registered and today >= registered + timedelta(days=REGISTRATION_GRACE_DAYS):
                overdue = due

    if overdue > 0:
        status = PaymentRecord.STATUS_OVERDUE
    elif unpaid > 0:
        status = PaymentRecord.STATUS_PENDING
    else:
        status = PaymentRecord.STATUS_PAID
    return PaymentStanding(status, due, unpaid, overdue)
