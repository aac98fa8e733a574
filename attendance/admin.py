"""
Admin configuration for attendance app
"""
from django.contrib import admin
from .models import AttendanceRecord


@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):
    """Attendance Record Admin"""
    list_display = ['student', 'date', 'status', 'created_at']
    list_filter = ['status', 'date']
    search_fields = ['student__name', 'student__code']
    readonly_fields = ['created_at']
    ordering = ['-date']
