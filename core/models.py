"""
Core models: Setting (key/value store for runtime configuration).
"""
from django.db import models


class Setting(models.Model):
    """
    Process-wide key/value setting. Single tenant: one row per key.
    Used for the fee calculation method (see core.services).
    """
    key = models.CharField(max_length=100, unique=True)
    value = models.TextField()
    description = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'settings'
        verbose_name = 'Setting'
        verbose_name_plural = 'Settings'
        ordering = ['key']

    def __str__(self):
        return f"{self.key}={self.value}"
