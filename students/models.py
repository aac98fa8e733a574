"""
Student and lifecycle state.
Lifecycle: active -> suspended -> active (suspension closed into suspend_history on restart),
active/suspended -> inactive (left the center).
"""
from django.db import models
from django.utils import timezone

from classes.models import ClassOffering
from payments.services.cycle import PAYMENT_CYCLE_CHOICES, normalize_cycle


class Student(models.Model):
    """
    Student: belongs to at most one class. payment_cycle overrides the class default.
    suspend_history: [{"suspendDate": "YYYY-MM-DD", "restartDate": "YYYY-MM-DD", "reason": str}]
    """
    STATUS_ACTIVE = "active"
    STATUS_INACTIVE = "inactive"
    STATUS_SUSPENDED = "suspended"

    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Đang học"),
        (STATUS_INACTIVE, "Nghỉ học"),
        (STATUS_SUSPENDED, "Tạm nghỉ"),
    ]

    name = models.CharField(max_length=255)
    code = models.CharField(max_length=50, unique=True)
    phone = models.CharField(max_length=20)
    class_offering = models.ForeignKey(
        ClassOffering,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='students',
        db_column='class_id',
    )
    registration_date = models.DateField(default=timezone.localdate)
    payment_cycle = models.CharField(max_length=20, choices=PAYMENT_CYCLE_CHOICES, blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    suspend_date = models.DateField(null=True, blank=True)
    suspend_reason = models.TextField(blank=True, null=True)
    restart_date = models.DateField(null=True, blank=True)
    last_active_date = models.DateField(null=True, blank=True)
    suspend_history = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'students'
        verbose_name = 'Student'
        verbose_name_plural = 'Students'
        ordering = ['name']
        indexes = [
            models.Index(fields=['class_offering', 'status'], name='students_class_status_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.code})"

    @property
    def effective_payment_cycle(self):
        """Student cycle, else the class cycle, else monthly."""
        if self.payment_cycle:
            return normalize_cycle(self.payment_cycle)
        if self.class_offering_id and self.class_offering:
            return normalize_cycle(self.class_offering.payment_cycle)
        return normalize_cycle(None)

    @property
    def is_active(self):
        return self.status == self.STATUS_ACTIVE
