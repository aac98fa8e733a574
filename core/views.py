"""
Core API views: settings store, dashboard report, current user.
"""
import logging

from django.db.models import Count, Q, Sum
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from attendance.models import AttendanceRecord
from classes.models import ClassOffering
from payments.models import PaymentRecord
from payments.services.cycle import add_months
from students.models import Student
from .models import Setting
from .serializers import SettingSerializer
from .services import FEE_METHOD_SETTING_KEY, set_setting

logger = logging.getLogger(__name__)

REVENUE_MONTHS = 6
# Collected money: adjusted payments keep their (reduced) amount as revenue.
REVENUE_STATUSES = (PaymentRecord.STATUS_PAID, PaymentRecord.STATUS_PARTIAL_REFUND)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me_view(request):
    """GET /api/auth/me"""
    user = request.user
    return Response({
        'id': user.id,
        'username': user.get_username(),
        'email': user.email,
        'fullName': user.get_full_name(),
        'isStaff': user.is_staff,
    })


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def settings_view(request):
    """
    GET  /api/settings/
    POST /api/settings/  body: {key, value, description?}
    """
    if request.method == 'POST':
        serializer = SettingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        setting = serializer.save()
        logger.info(f"[settings] Created {setting.key}={setting.value}")
        return Response(SettingSerializer(setting).data, status=status.HTTP_201_CREATED)

    return Response(SettingSerializer(Setting.objects.all(), many=True).data)


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def setting_detail_view(request, key):
    """
    GET /api/settings/{key}
    PUT /api/settings/{key}  body: {value, description?}: creates the key when missing
    """
    setting = Setting.objects.filter(key=key).first()

    if request.method == 'GET':
        if setting is None:
            return Response({'detail': 'Không tìm thấy cài đặt'}, status=status.HTTP_404_NOT_FOUND)
        return Response(SettingSerializer(setting).data)

    data = {'key': key, 'value': request.data.get('value')}
    if 'description' in request.data:
        data['description'] = request.data.get('description')
    serializer = SettingSerializer(setting, data=data, partial=setting is not None)
    serializer.is_valid(raise_exception=True)
    setting = set_setting(
        key,
        serializer.validated_data['value'],
        description=serializer.validated_data.get('description'),
    )
    if key == FEE_METHOD_SETTING_KEY:
        logger.info(f"[settings] Fee calculation method is now {setting.value}")
    return Response(SettingSerializer(setting).data)


def _sum_amount(queryset):
    return queryset.aggregate(total=Sum('amount'))['total'] or 0


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_view(request):
    """
    GET /api/reports/dashboard
    Student totals, payment totals by status, attendance counts,
    students per class and revenue for the last 6 months.
    """
    students = Student.objects.all()
    total_students = students.count()
    active_students = students.filter(status=Student.STATUS_ACTIVE).count()
    suspended_students = students.filter(status=Student.STATUS_SUSPENDED).count()

    payments = PaymentRecord.objects.all()
    paid = _sum_amount(payments.filter(status=PaymentRecord.STATUS_PAID))
    pending = _sum_amount(payments.filter(status=PaymentRecord.STATUS_PENDING))
    overdue = _sum_amount(payments.filter(status=PaymentRecord.STATUS_OVERDUE))
    partial_refund = _sum_amount(payments.filter(status=PaymentRecord.STATUS_PARTIAL_REFUND))

    attendance_counts = {
        row['status']: row['n']
        for row in AttendanceRecord.objects.order_by().values('status').annotate(n=Count('id'))
    }

    per_class = ClassOffering.objects.annotate(
        student_count=Count('students'),
        active_count=Count('students', filter=Q(students__status=Student.STATUS_ACTIVE)),
    ).order_by('name')

    month_start = timezone.localdate().replace(day=1)
    monthly_revenue = []
    for offset in range(REVENUE_MONTHS - 1, -1, -1):
        start = add_months(month_start, -offset)
        end = add_months(start, 1)
        total = _sum_amount(payments.filter(
            status__in=REVENUE_STATUSES, payment_date__gte=start, payment_date__lt=end,
        ))
        monthly_revenue.append({'month': f"{start.month}/{start.year}", 'amount': total})

    return Response({
        'students': {
            'total': total_students,
            'active': active_students,
            'suspended': suspended_students,
            'inactive': total_students - active_students - suspended_students,
        },
        'finances': {
            'paidAmount': paid,
            'pendingAmount': pending,
            'overdueAmount': overdue,
            'partialRefundAmount': partial_refund,
            'totalAmount': paid + pending + overdue + partial_refund,
        },
        'attendance': {
            'present': attendance_counts.get(AttendanceRecord.STATUS_PRESENT, 0),
            'absent': attendance_counts.get(AttendanceRecord.STATUS_ABSENT, 0),
            'teacherAbsent': attendance_counts.get(AttendanceRecord.STATUS_TEACHER_ABSENT, 0),
            'makeup': attendance_counts.get(AttendanceRecord.STATUS_MAKEUP, 0),
        },
        'studentsPerClass': [
            {'id': c.id, 'name': c.name, 'count': c.student_count, 'active': c.active_count}
            for c in per_class
        ],
        'monthlyRevenue': monthly_revenue,
    })
