"""
URL configuration for the tuition center backend
"""
from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods
from django.views.generic import RedirectView
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularSwaggerView,
    SpectacularRedocView,
)
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from core.views import me_view


@require_http_methods(["GET"])
def health_view(request):
    """Minimal health check for connectivity verification. No auth required."""
    result = {'status': 'ok', 'service': 'tuition-center', 'db': 'ok'}
    try:
        from django.db import connection
        connection.ensure_connection()
    except Exception as e:
        result['status'] = 'degraded'
        result['db'] = f'error: {str(e)[:80]}'
    return JsonResponse(result)


@require_http_methods(["GET"])
def api_root(request):
    """Root endpoint - API information"""
    return JsonResponse({
        'name': 'Tuition Center API',
        'version': '1.0.0',
        'description': 'Quản lý lớp học, học sinh, điểm danh và học phí',
        'endpoints': {
            'health': '/api/health/',
            'auth': '/api/auth/token/',
            'classes': '/api/classes/',
            'students': '/api/students/',
            'attendance': '/api/attendance/',
            'payments': '/api/payments/',
            'settings': '/api/settings/',
            'reports': '/api/reports/dashboard',
            'parent': '/api/parent/students/{code}',
            'docs': '/api/docs/',
            'schema': '/api/schema/',
        }
    })


urlpatterns = [
    path('', api_root, name='api-root'),
    path('admin', RedirectView.as_view(url='/admin/', permanent=False)),
    path('admin/', admin.site.urls),
    path('api', RedirectView.as_view(url='/api/', permanent=False)),
    path('api/', api_root),
    path('api/health/', health_view, name='api-health'),

    # API Schema
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    # Auth
    path('api/auth/token/', TokenObtainPairView.as_view(), name='token-obtain'),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('api/auth/me', me_view, name='auth-me'),

    # API endpoints
    path('api/classes/', include('classes.urls')),
    path('api/students/', include('students.urls.staff')),
    path('api/attendance/', include('attendance.urls')),
    path('api/payments/', include('payments.urls')),
    path('api/parent/', include('students.urls.parent')),
    path('api/', include('core.urls')),
]
