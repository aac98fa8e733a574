"""
Attendance record: one row per student per marking.
No uniqueness on (student, date): duplicates are allowed and counted.
"""
from django.db import models

from students.models import Student


class AttendanceRecord(models.Model):
    STATUS_PRESENT = "present"
    STATUS_ABSENT = "absent"
    STATUS_TEACHER_ABSENT = "teacher_absent"
    STATUS_MAKEUP = "makeup"

    STATUS_CHOICES = [
        (STATUS_PRESENT, "Có mặt"),
        (STATUS_ABSENT, "Vắng mặt"),
        (STATUS_TEACHER_ABSENT, "GV nghỉ"),
        (STATUS_MAKEUP, "Học bù"),
    ]

    student = models.ForeignKey(
        Student,
        on_delete=models.CASCADE,
        related_name="attendance_records",
    )
    date = models.DateField(db_column="date")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "attendance"
        verbose_name = "Attendance Record"
        verbose_name_plural = "Attendance Records"
        ordering = ["-date", "-id"]
        indexes = [
            models.Index(fields=["student", "date"], name="attendance_student_date_idx"),
            models.Index(fields=["date"], name="attendance_date_idx"),
        ]

    def __str__(self):
        return f"{self.student.name} - {self.date} - {self.status}"
