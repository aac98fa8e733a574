"""
Student lifecycle services: suspend, restart, withdraw (with fee proration).
"""
import logging

from django.db import transaction
from django.utils import timezone

from attendance.models import AttendanceRecord
from attendance.services.aggregation import attended_sessions
from payments.models import PaymentRecord
from payments.services.proration import apply_proration, is_prorated
from students.models import Student

logger = logging.getLogger(__name__)


class LifecycleError(Exception):
    """Transition not allowed from the student's current status."""


def suspend_student(student, suspend_date=None, reason=None):
    if not student.is_active:
        raise LifecycleError("Chỉ học sinh đang học mới có thể tạm nghỉ")
    suspend_date = suspend_date or timezone.localdate()
    student.status = Student.STATUS_SUSPENDED
    student.suspend_date = suspend_date
    student.suspend_reason = reason or None
    student.last_active_date = suspend_date
    student.save(update_fields=['status', 'suspend_date', 'suspend_reason', 'last_active_date', 'updated_at'])
    logger.info(f"[student] Suspended student_id={student.id} from {suspend_date}")
    return student


def restart_student(student, restart_date=None):
    """Close the open suspension into suspend_history and reactivate."""
    if student.status != Student.STATUS_SUSPENDED:
        raise LifecycleError("Học sinh không ở trạng thái tạm nghỉ")
    restart_date = restart_date or timezone.localdate()
    if student.suspend_date and restart_date < student.suspend_date:
        raise LifecycleError("Ngày học lại phải sau ngày tạm nghỉ")

    history = list(student.suspend_history or [])
    history.append({
        "suspendDate": student.suspend_date.isoformat() if student.suspend_date else None,
        "restartDate": restart_date.isoformat(),
        "reason": student.suspend_reason or "",
    })
    student.suspend_history = history
    student.status = Student.STATUS_ACTIVE
    student.restart_date = restart_date
    student.suspend_date = None
    student.suspend_reason = None
    student.save(update_fields=[
        'suspend_history', 'status', 'restart_date', 'suspend_date', 'suspend_reason', 'updated_at',
    ])
    logger.info(f"[student] Restarted student_id={student.id} on {restart_date}")
    return student


def find_adjustable_payment(student):
    """Latest paid payment (by valid_to) that has not been prorated yet."""
    candidates = [
        p for p in PaymentRecord.objects.filter(student=student, status=PaymentRecord.STATUS_PAID)
        if not is_prorated(p)
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda p: (p.valid_to, p.id))


def count_attended_sessions(student, payment, until=None):
    """Present + makeup records inside the payment's validity window (up to `until`)."""
    end = payment.valid_to
    if until and until < end:
        end = until
    records = AttendanceRecord.objects.filter(
        student=student, date__gte=payment.valid_from, date__lte=end,
    )
    return attended_sessions(records)


def withdraw_student(student, actual_sessions=None, reason="", withdraw_date=None):
    """
    Student leaves: prorate the latest unadjusted paid cycle and mark inactive.
    Both writes happen in one transaction.
    Returns (student, payment or None, ProrationResult or None).
    """
    if student.status == Student.STATUS_INACTIVE:
        raise LifecycleError("Học sinh đã nghỉ học")
    withdraw_date = withdraw_date or timezone.localdate()

    with transaction.atomic():
        payment = find_adjustable_payment(student)
        result = None
        if payment is not None:
            if actual_sessions is None:
                actual_sessions = count_attended_sessions(student, payment, until=withdraw_date)
            reason_text = reason or "Học sinh nghỉ học/lớp kết thúc sớm."
            result = apply_proration(payment, actual_sessions, reason=reason_text)
        else:
            logger.info(f"[student] No adjustable payment for student_id={student.id}")

        student.status = Student.STATUS_INACTIVE
        student.last_active_date = withdraw_date
        student.suspend_date = None
        student.suspend_reason = None
        student.save(update_fields=['status', 'last_active_date', 'suspend_date', 'suspend_reason', 'updated_at'])

    logger.info(
        f"[student] Withdrew student_id={student.id}, payment_id={getattr(payment, 'id', None)}, "
        f"adjusted={bool(result and result.adjusted)}"
    )
    return student, payment, result
