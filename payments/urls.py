"""
Payment API URLs
"""
from django.urls import path

from .views import (
    payments_view,
    payments_by_student_view,
    payment_quote_view,
    payment_detail_view,
    payment_adjust_view,
)

app_name = 'payments'

urlpatterns = [
    path('', payments_view, name='list'),
    path('quote', payment_quote_view, name='quote'),
    path('student/<int:student_id>', payments_by_student_view, name='by-student'),
    path('<int:pk>', payment_detail_view, name='detail'),
    path('<int:pk>/adjust', payment_adjust_view, name='adjust'),
]
