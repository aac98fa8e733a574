"""
Class API URLs
"""
from django.urls import path

from .views import (
    classes_view,
    class_detail_view,
    class_close_view,
    class_reopen_view,
    class_students_view,
)

app_name = 'classes'

urlpatterns = [
    path('', classes_view, name='list'),
    path('<int:pk>', class_detail_view, name='detail'),
    path('<int:pk>/close', class_close_view, name='close'),
    path('<int:pk>/reopen', class_reopen_view, name='reopen'),
    path('<int:pk>/students', class_students_view, name='students'),
]
