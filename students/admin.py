"""
Admin configuration for students app
"""
from django.contrib import admin
from .models import Student


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    """Student Admin"""
    list_display = ['code', 'name', 'phone', 'class_offering', 'payment_cycle', 'status', 'registration_date']
    list_filter = ['status', 'payment_cycle', 'class_offering']
    search_fields = ['code', 'name', 'phone']
    readonly_fields = ['suspend_history', 'created_at', 'updated_at']
    list_select_related = ['class_offering']
