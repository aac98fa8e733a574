"""
Student API views (staff)
"""
import logging

from django.db.models import Q
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.services import get_fee_calculation_mode
from payments.serializers import PaymentSerializer, payment_standing_data, payment_status_data
from payments.services.status import payment_standing, resolve_status
from students.models import Student
from students.serializers import (
    RestartSerializer,
    StudentSerializer,
    SuspendSerializer,
    WithdrawSerializer,
)
from students.services import LifecycleError, restart_student, suspend_student, withdraw_student

logger = logging.getLogger(__name__)


def _students_queryset():
    return Student.objects.select_related('class_offering').prefetch_related('payments')


def _get_student(pk):
    try:
        return _students_queryset().get(pk=pk)
    except Student.DoesNotExist:
        return None


def _not_found():
    return Response({'detail': 'Không tìm thấy học sinh'}, status=status.HTTP_404_NOT_FOUND)


def _payment_statuses(students, today):
    return {
        s.id: resolve_status(s, list(s.payments.all()), today).status
        for s in students
    }


def _student_data(student):
    today = timezone.localdate()
    context = {'payment_statuses': _payment_statuses([student], today)}
    return StudentSerializer(student, context=context).data


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def students_view(request):
    """
    GET /api/students/?classId=&status=active|inactive|suspended&q=
    Each row carries paymentStatus (latest-payment rule).
    POST /api/students/
    """
    if request.method == 'POST':
        serializer = StudentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        student = serializer.save()
        logger.info(f"[student] Created student_id={student.id} code={student.code}")
        return Response(_student_data(_get_student(student.id)), status=status.HTTP_201_CREATED)

    students = _students_queryset()
    class_id = request.query_params.get('classId')
    if class_id:
        if not str(class_id).isdigit():
            return Response({'detail': 'classId không hợp lệ'}, status=status.HTTP_400_BAD_REQUEST)
        students = students.filter(class_offering_id=int(class_id))
    status_filter = request.query_params.get('status')
    if status_filter:
        students = students.filter(status=status_filter)
    q = (request.query_params.get('q') or '').strip()
    if q:
        students = students.filter(Q(name__icontains=q) | Q(code__icontains=q) | Q(phone__icontains=q))

    students = list(students)
    context = {'payment_statuses': _payment_statuses(students, timezone.localdate())}
    return Response(StudentSerializer(students, many=True, context=context).data)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def student_detail_view(request, pk):
    """
    GET/PUT/PATCH /api/students/{id}
    DELETE /api/students/{id} (attendance and payments are deleted with the student)
    """
    student = _get_student(pk)
    if student is None:
        return _not_found()

    if request.method == 'GET':
        return Response(_student_data(student))

    if request.method == 'DELETE':
        student.delete()
        logger.info(f"[student] Deleted student_id={pk}")
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = StudentSerializer(student, data=request.data, partial=request.method == 'PATCH')
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return Response(_student_data(_get_student(pk)))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def student_suspend_view(request, pk):
    """POST /api/students/{id}/suspend  body: {date?, reason?}"""
    student = _get_student(pk)
    if student is None:
        return _not_found()
    serializer = SuspendSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    try:
        suspend_student(
            student,
            suspend_date=serializer.validated_data.get('date'),
            reason=serializer.validated_data.get('reason'),
        )
    except LifecycleError as e:
        return Response({'detail': str(e), 'code': 'invalid_transition'}, status=status.HTTP_400_BAD_REQUEST)
    return Response(_student_data(student))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def student_restart_view(request, pk):
    """POST /api/students/{id}/restart  body: {date?}"""
    student = _get_student(pk)
    if student is None:
        return _not_found()
    serializer = RestartSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    try:
        restart_student(student, restart_date=serializer.validated_data.get('date'))
    except LifecycleError as e:
        return Response({'detail': str(e), 'code': 'invalid_transition'}, status=status.HTTP_400_BAD_REQUEST)
    return Response(_student_data(student))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def student_withdraw_view(request, pk):
    """
    POST /api/students/{id}/withdraw  body: {actualSessions?, reason?, date?}
    Prorates the latest paid cycle (attended sessions counted when actualSessions
    is omitted) and marks the student inactive.
    """
    student = _get_student(pk)
    if student is None:
        return _not_found()
    serializer = WithdrawSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    try:
        student, payment, result = withdraw_student(
            student,
            actual_sessions=serializer.validated_data.get('actualSessions'),
            reason=serializer.validated_data.get('reason') or '',
            withdraw_date=serializer.validated_data.get('date'),
        )
    except LifecycleError as e:
        return Response({'detail': str(e), 'code': 'invalid_transition'}, status=status.HTTP_400_BAD_REQUEST)

    adjustment = None
    if result is not None:
        adjustment = {
            'originalAmount': result.original_amount,
            'adjustedAmount': result.adjusted_amount,
            'plannedSessions': result.planned_sessions,
            'actualSessions': result.actual_sessions,
            'adjusted': result.adjusted,
        }
    return Response({
        'student': _student_data(_get_student(pk)),
        'payment': PaymentSerializer(payment).data if payment else None,
        'adjustment': adjustment,
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def student_payment_status_view(request, pk):
    """
    GET /api/students/{id}/payment-status
    Latest-payment status with next due window, plus outstanding amounts.
    """
    student = _get_student(pk)
    if student is None:
        return _not_found()
    today = timezone.localdate()
    mode = get_fee_calculation_mode()
    payments = list(student.payments.all())

    data = payment_status_data(resolve_status(student, payments, today))
    data['studentId'] = student.id
    data['paymentCycle'] = student.effective_payment_cycle
    data['feeMode'] = mode
    data['standing'] = payment_standing_data(
        payment_standing(student, student.class_offering, payments, today, mode)
    )
    return Response(data)
