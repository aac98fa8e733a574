"""
Class offerings. Schedule is free text ("Thứ 2, Thứ 4 (18:00 - 20:00)");
schedule_days parses it into ISO weekdays (Mon=1..Sun=7).
"""
import re

from django.core.validators import MinValueValidator
from django.db import models

from payments.services.cycle import DEFAULT_CYCLE, PAYMENT_CYCLE_CHOICES

_TIME_RANGE = re.compile(r"\d{1,2}[:h\.]\d{2}")
_SUNDAY = re.compile(r"\b(cn|chủ\s*nhật|chu\s*nhat)\b", re.IGNORECASE)
_DAY_NUMBER = re.compile(r"(?<![\d:])([2-7])(?![\d:])")


def parse_schedule_days(schedule):
    """
    Parse weekdays from a schedule label.
    "Thứ 2, Thứ 4" => [1, 3]; "2, 4, 6 (18:00 - 20:00)" => [1, 3, 5]; "T7, CN" => [6, 7].
    Vietnamese "Thứ N" is ISO weekday N - 1. Times are ignored.
    """
    if not schedule or not isinstance(schedule, str):
        return []
    text = _TIME_RANGE.sub(" ", schedule.lower())
    days = set()
    if _SUNDAY.search(text):
        days.add(7)
        text = _SUNDAY.sub(" ", text)
    for match in _DAY_NUMBER.finditer(text):
        days.add(int(match.group(1)) - 1)
    return sorted(days)


class ClassOffering(models.Model):
    """
    Class: fee is in VND; its meaning (per session or per cycle) depends on
    the fee calculation method setting.
    Closed classes keep their history but stop accruing fees.
    """
    STATUS_ACTIVE = "active"
    STATUS_CLOSED = "closed"

    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Đang hoạt động"),
        (STATUS_CLOSED, "Đã đóng"),
    ]

    name = models.CharField(max_length=255)
    fee = models.PositiveIntegerField(validators=[MinValueValidator(1)], help_text="VND")
    schedule = models.CharField(max_length=255, help_text="e.g. Thứ 2, Thứ 4 (18:00 - 20:00)")
    location = models.CharField(max_length=255)
    payment_cycle = models.CharField(max_length=20, choices=PAYMENT_CYCLE_CHOICES, default=DEFAULT_CYCLE)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)
    closed_date = models.DateField(null=True, blank=True)
    closed_reason = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'classes'
        verbose_name = 'Class'
        verbose_name_plural = 'Classes'
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def schedule_days(self):
        return parse_schedule_days(self.schedule)

    @property
    def is_closed(self):
        return self.status == self.STATUS_CLOSED

    def is_scheduled_on(self, day):
        return day.isoweekday() in self.schedule_days
