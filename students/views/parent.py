"""
Parent portal views. Public lookup by student code; no login.
"""
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from attendance.serializers import AttendanceRecordSerializer
from attendance.services.aggregation import summarize
from classes.serializers import ClassOfferingSerializer
from core.services import get_fee_calculation_mode
from payments.serializers import PaymentSerializer, payment_status_data
from payments.services.status import resolve_status
from students.models import Student


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def parent_student_view(request, code):
    """
    GET /api/parent/students/{code}
    Student, class, payment history, attendance history and summary.
    """
    code = (code or '').strip()
    try:
        student = Student.objects.select_related('class_offering').get(code=code)
    except Student.DoesNotExist:
        return Response({'detail': 'Không tìm thấy học sinh với mã này'}, status=status.HTTP_404_NOT_FOUND)

    payments = list(student.payments.all())
    records = list(student.attendance_records.select_related('student').all())
    class_data = None
    if student.class_offering_id:
        class_data = ClassOfferingSerializer(
            student.class_offering, context={'fee_mode': get_fee_calculation_mode()},
        ).data

    return Response({
        'student': {
            'id': student.id,
            'name': student.name,
            'code': student.code,
            'status': student.status,
            'registrationDate': student.registration_date.isoformat() if student.registration_date else None,
            'paymentCycle': student.effective_payment_cycle,
        },
        'class': class_data,
        'payments': PaymentSerializer(payments, many=True).data,
        'attendance': AttendanceRecordSerializer(records, many=True).data,
        'attendanceSummary': summarize(records),
        'paymentStatus': payment_status_data(resolve_status(student, payments, timezone.localdate())),
    })
