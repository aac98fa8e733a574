"""
Attendance API URLs
"""
from django.urls import path

from .views import (
    attendance_view,
    attendance_by_student_view,
    attendance_today_view,
    attendance_detail_view,
    attendance_bulk_delete_view,
)

app_name = 'attendance'

urlpatterns = [
    path('', attendance_view, name='list'),
    path('today', attendance_today_view, name='today'),
    path('bulk-delete', attendance_bulk_delete_view, name='bulk-delete'),
    path('student/<int:student_id>', attendance_by_student_view, name='by-student'),
    path('<int:pk>', attendance_detail_view, name='detail'),
]
