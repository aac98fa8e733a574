"""
Admin configuration for payments app
"""
from django.contrib import admin
from .models import PaymentRecord


@admin.register(PaymentRecord)
class PaymentRecordAdmin(admin.ModelAdmin):
    """Payment Admin"""
    list_display = ['student', 'amount', 'payment_date', 'valid_from', 'valid_to', 'status']
    list_filter = ['status', 'payment_date']
    search_fields = ['student__name', 'student__code', 'notes']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-payment_date']
