"""
Student API URLs
"""
from django.urls import path
from ..views.staff import (
    students_view,
    student_detail_view,
    student_suspend_view,
    student_restart_view,
    student_withdraw_view,
    student_payment_status_view,
)

app_name = 'students'

urlpatterns = [
    path('', students_view, name='list'),
    path('<int:pk>', student_detail_view, name='detail'),
    path('<int:pk>/suspend', student_suspend_view, name='suspend'),
    path('<int:pk>/restart', student_restart_view, name='restart'),
    path('<int:pk>/withdraw', student_withdraw_view, name='withdraw'),
    path('<int:pk>/payment-status', student_payment_status_view, name='payment-status'),
]
