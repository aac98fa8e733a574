"""
Admin configuration for classes app
"""
from django.contrib import admin
from .models import ClassOffering


@admin.register(ClassOffering)
class ClassOfferingAdmin(admin.ModelAdmin):
    """Class Admin"""
    list_display = ['name', 'fee', 'payment_cycle', 'schedule', 'location', 'status']
    list_filter = ['status', 'payment_cycle']
    search_fields = ['name', 'location']
    readonly_fields = ['created_at', 'updated_at']
