"""
Parent portal URLs
"""
from django.urls import path
from ..views.parent import parent_student_view

app_name = 'parent'

urlpatterns = [
    path('students/<str:code>', parent_student_view, name='student'),
]
