"""
Payment status resolver tests.
- no payments -> pending with next due window starting today
- latest payment still valid -> its own status
- expired -> overdue, except per-day students (paid/pending, never overdue)
- payment_standing grace windows: 7 days after valid_to, 14 days after registration
"""
from datetime import date, timedelta

from django.test import SimpleTestCase

from classes.models import ClassOffering
from core.services import FEE_METHOD_PER_CYCLE, FEE_METHOD_PER_SESSION
from payments.models import PaymentRecord
from payments.services.cycle import CYCLE_EIGHT_SESSIONS, CYCLE_MONTHLY, CYCLE_PER_DAY
from payments.services.status import (
    PAYMENT_GRACE_DAYS,
    REGISTRATION_GRACE_DAYS,
    STATUS_INACTIVE,
    latest_payment,
    payment_standing,
    resolve_status,
)
from students.models import Student

TODAY = date(2024, 5, 20)


def _student(cycle=CYCLE_MONTHLY, **kwargs):
    defaults = dict(name="Bình", code="HS100", phone="0901234567", payment_cycle=cycle,
                    registration_date=date(2024, 1, 2))
    defaults.update(kwargs)
    return Student(**defaults)


def _payment(valid_to, status=PaymentRecord.STATUS_PAID, amount=480000, days=27):
    return PaymentRecord(
        amount=amount,
        valid_from=valid_to - timedelta(days=days),
        valid_to=valid_to,
        status=status,
    )


class ResolveStatusTests(SimpleTestCase):
    def test_no_payments_is_pending(self):
        result = resolve_status(_student(), [], TODAY)
        self.assertEqual(result.status, PaymentRecord.STATUS_PENDING)
        self.assertEqual(result.next_due_from, TODAY)
        self.assertEqual(result.next_due_to, date(2024, 6, 19))
        self.assertIsNone(result.latest_payment)

    def test_no_payments_per_day_window(self):
        result = resolve_status(_student(CYCLE_PER_DAY), [], TODAY)
        self.assertEqual(result.status, PaymentRecord.STATUS_PENDING)
        self.assertEqual(result.next_due_to, TODAY + timedelta(days=6))

    def test_current_payment_keeps_its_status(self):
        for status in (PaymentRecord.STATUS_PAID, PaymentRecord.STATUS_PARTIAL_REFUND, PaymentRecord.STATUS_PENDING):
            result = resolve_status(_student(), [_payment(TODAY, status=status)], TODAY)
            self.assertEqual(result.status, status)
            self.assertIsNone(result.next_due_from)
            self.assertIsNone(result.next_due_to)

    def test_expired_yesterday_is_overdue(self):
        payment = _payment(TODAY - timedelta(days=1))
        result = resolve_status(_student(), [payment], TODAY)
        self.assertEqual(result.status, PaymentRecord.STATUS_OVERDUE)
        self.assertEqual(result.next_due_from, TODAY)
        self.assertIs(result.latest_payment, payment)

    def test_monthly_ten_days_expired_is_overdue(self):
        valid_to = TODAY - timedelta(days=10)
        result = resolve_status(_student("1-thang"), [_payment(valid_to)], TODAY)
        self.assertEqual(result.status, PaymentRecord.STATUS_OVERDUE)
        self.assertEqual(result.next_due_from, valid_to + timedelta(days=1))
        self.assertEqual(result.next_due_to, date(2024, 6, 10))

    def test_per_day_is_never_overdue(self):
        yesterday = TODAY - timedelta(days=1)
        pending = resolve_status(
            _student(CYCLE_PER_DAY), [_payment(yesterday, status=PaymentRecord.STATUS_PENDING)], TODAY,
        )
        self.assertEqual(pending.status, PaymentRecord.STATUS_PENDING)

        paid = resolve_status(_student(CYCLE_PER_DAY), [_payment(TODAY - timedelta(days=60))], TODAY)
        self.assertEqual(paid.status, PaymentRecord.STATUS_PAID)
        self.assertEqual(paid.next_due_to, paid.next_due_from + timedelta(days=6))

    def test_latest_is_by_valid_to_not_list_order(self):
        old = _payment(TODAY - timedelta(days=40))
        current = _payment(TODAY + timedelta(days=5), status=PaymentRecord.STATUS_PARTIAL_REFUND)
        self.assertIs(latest_payment([current, old]), current)
        result = resolve_status(_student(), [old, current], TODAY)
        self.assertEqual(result.status, PaymentRecord.STATUS_PARTIAL_REFUND)

    def test_missing_cycle_falls_back_to_monthly(self):
        result = resolve_status(_student(cycle=None), [], TODAY)
        self.assertEqual(result.next_due_to, date(2024, 6, 19))


class PaymentStandingTests(SimpleTestCase):
    def setUp(self):
        self.class_offering = ClassOffering(
            name="Lớp 3", fee=100000, schedule="Thứ 3, Thứ 6", location="P2", payment_cycle=CYCLE_MONTHLY,
        )

    def test_inactive_student(self):
        standing = payment_standing(
            _student(status=Student.STATUS_SUSPENDED), self.class_offering, [], TODAY,
        )
        self.assertEqual(standing, (STATUS_INACTIVE, 0, 0, 0))

    def test_no_class_means_nothing_due(self):
        standing = payment_standing(_student(), None, [], TODAY)
        self.assertEqual(standing.status, PaymentRecord.STATUS_PENDING)
        self.assertEqual(standing.due_amount, 0)

    def test_current_payment_is_paid(self):
        standing = payment_standing(_student(), self.class_offering, [_payment(TODAY + timedelta(days=3))], TODAY)
        self.assertEqual(standing.status, PaymentRecord.STATUS_PAID)
        self.assertEqual(standing.due_amount, 400000)
        self.assertEqual(standing.unpaid_amount, 0)
        self.assertEqual(standing.overdue_amount, 0)

    def test_expired_within_grace_is_pending(self):
        payment = _payment(TODAY - timedelta(days=PAYMENT_GRACE_DAYS - 1))
        standing = payment_standing(_student(), self.class_offering, [payment], TODAY)
        self.assertEqual(standing.status, PaymentRecord.STATUS_PENDING)
        self.assertEqual(standing.unpaid_amount, 400000)
        self.assertEqual(standing.overdue_amount, 0)

    def test_expired_past_grace_is_overdue(self):
        payment = _payment(TODAY - timedelta(days=PAYMENT_GRACE_DAYS + 1))
        standing = payment_standing(_student(), self.class_offering, [payment], TODAY)
        self.assertEqual(standing.status, PaymentRecord.STATUS_OVERDUE)
        self.assertEqual(standing.overdue_amount, 400000)

    def test_overdue_on_last_grace_day(self):
        payment = _payment(TODAY - timedelta(days=PAYMENT_GRACE_DAYS))
        standing = payment_standing(_student(), self.class_offering, [payment], TODAY)
        self.assertEqual(standing.status, PaymentRecord.STATUS_OVERDUE)
        self.assertEqual(standing.unpaid_amount, 400000)
        self.assertEqual(standing.overdue_amount, 400000)

    def test_never_paid_uses_registration_grace(self):
        fresh = _student(registration_date=TODAY - timedelta(days=REGISTRATION_GRACE_DAYS - 1))
        self.assertEqual(payment_standing(fresh, self.class_offering, [], TODAY).status, PaymentRecord.STATUS_PENDING)

        late = _student(registration_date=TODAY - timedelta(days=REGISTRATION_GRACE_DAYS))
        self.assertEqual(payment_standing(late, self.class_offering, [], TODAY).status, PaymentRecord.STATUS_OVERDUE)

    def test_per_day_never_overdue(self):
        payment = _payment(TODAY - timedelta(days=30))
        standing = payment_standing(_student(CYCLE_PER_DAY), self.class_offering, [payment], TODAY)
        self.assertEqual(standing.status, PaymentRecord.STATUS_PENDING)
        self.assertEqual(standing.unpaid_amount, 100000)
        self.assertEqual(standing.overdue_amount, 0)

    def test_mode_changes_due_amount(self):
        student = _student(CYCLE_EIGHT_SESSIONS)
        per_session = payment_standing(student, self.class_offering, [], TODAY, FEE_METHOD_PER_SESSION)
        per_cycle = payment_standing(student, self.class_offering, [], TODAY, FEE_METHOD_PER_CYCLE)
        self.assertEqual(per_session.due_amount, 800000)
        self.assertEqual(per_cycle.due_amount, 100000)
