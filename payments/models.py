"""
Payment models
"""
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from students.models import Student


class PaymentRecord(models.Model):
    """
    Payment for one cycle [valid_from, valid_to].
    amount is the amount after any proration (not necessarily the nominal fee).
    Records are updated in place on adjustment; there is no separate ledger.
    """
    STATUS_PAID = 'paid'
    STATUS_PENDING = 'pending'
    STATUS_OVERDUE = 'overdue'
    STATUS_PARTIAL_REFUND = 'partial_refund'

    STATUS_CHOICES = [
        (STATUS_PAID, 'Đã thanh toán'),
        (STATUS_PENDING, 'Chờ thanh toán'),
        (STATUS_OVERDUE, 'Quá hạn'),
        (STATUS_PARTIAL_REFUND, 'Hoàn tiền một phần'),
    ]

    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name='payments',
    )
    amount = models.PositiveIntegerField(validators=[MinValueValidator(1)], help_text="VND")
    payment_date = models.DateField(default=timezone.localdate)
    valid_from = models.DateField()
    valid_to = models.DateField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PAID, db_index=True)
    planned_sessions = models.PositiveIntegerField(null=True, blank=True)
    actual_sessions = models.PositiveIntegerField(null=True, blank=True)
    adjustment_reason = models.TextField(blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payments'
        verbose_name = 'Payment'
        verbose_name_plural = 'Payments'
        ordering = ['-valid_to', '-payment_date', '-id']
        indexes = [
            models.Index(fields=['student', 'valid_to'], name='payments_student_valid_to_idx'),
            models.Index(fields=['payment_date'], name='payments_payment_date_idx'),
        ]

    def __str__(self):
        return f"Payment {self.id} - {self.student.name} - {self.amount}"

    def is_current(self, today=None):
        today = today or timezone.localdate()
        return today <= self.valid_to
