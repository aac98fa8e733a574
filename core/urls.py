"""
Core API URLs (settings, reports)
"""
from django.urls import path

from .views import settings_view, setting_detail_view, dashboard_view

app_name = 'core'

urlpatterns = [
    path('settings/', settings_view, name='settings'),
    path('settings/<str:key>', setting_detail_view, name='setting-detail'),
    path('reports/dashboard', dashboard_view, name='dashboard'),
]
