"""
Payment API views
"""
import logging
from datetime import timedelta

from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.services import get_fee_calculation_mode
from core.utils import parse_iso_date
from payments.models import PaymentRecord
from payments.serializers import (
    PaymentAdjustSerializer,
    PaymentCreateSerializer,
    PaymentSerializer,
    PaymentUpdateSerializer,
)
from payments.services.cycle import end_of_cycle, sessions_for_cycle
from payments.services.fees import cycle_fee, format_fee_display
from payments.services.proration import apply_proration
from payments.services.status import resolve_status
from students.models import Student

logger = logging.getLogger(__name__)


def _payments_queryset():
    return PaymentRecord.objects.select_related('student', 'student__class_offering')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def payments_view(request):
    """
    GET /api/payments/?status=paid|pending|overdue|partial_refund&from=&to=
    POST /api/payments/: amount, validTo and plannedSessions default from the student's cycle
    """
    if request.method == 'POST':
        serializer = PaymentCreateSerializer(data=request.data, context={'fee_mode': get_fee_calculation_mode()})
        serializer.is_valid(raise_exception=True)
        payment = serializer.save()
        logger.info(
            f"[payment] Created payment_id={payment.id} student_id={payment.student_id} "
            f"amount={payment.amount} valid={payment.valid_from}..{payment.valid_to}"
        )
        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)

    payments = _payments_queryset()
    status_filter = request.query_params.get('status')
    if status_filter:
        payments = payments.filter(status=status_filter)
    date_from = parse_iso_date(request.query_params.get('from'))
    date_to = parse_iso_date(request.query_params.get('to'))
    if date_from:
        payments = payments.filter(payment_date__gte=date_from)
    if date_to:
        payments = payments.filter(payment_date__lte=date_to)
    return Response(PaymentSerializer(payments, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def payments_by_student_view(request, student_id):
    """GET /api/payments/student/{studentId}"""
    if not Student.objects.filter(pk=student_id).exists():
        return Response({'detail': 'Không tìm thấy học sinh'}, status=status.HTTP_404_NOT_FOUND)
    payments = _payments_queryset().filter(student_id=student_id)
    return Response(PaymentSerializer(payments, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def payment_quote_view(request):
    """
    GET /api/payments/quote?studentId=&validFrom=
    Suggested amount and validity window for the student's next payment.
    validFrom defaults to the next due date (today when nothing is owed yet).
    """
    student_id = request.query_params.get('studentId')
    if not student_id or not str(student_id).isdigit():
        return Response({'detail': 'studentId là bắt buộc'}, status=status.HTTP_400_BAD_REQUEST)
    try:
        student = Student.objects.select_related('class_offering').get(pk=int(student_id))
    except Student.DoesNotExist:
        return Response({'detail': 'Không tìm thấy học sinh'}, status=status.HTTP_404_NOT_FOUND)

    today = timezone.localdate()
    valid_from = parse_iso_date(request.query_params.get('validFrom'))
    if valid_from is None:
        result = resolve_status(student, list(student.payments.all()), today)
        if result.next_due_from:
            valid_from = result.next_due_from
        elif result.latest_payment is not None:
            valid_from = result.latest_payment.valid_to + timedelta(days=1)
        else:
            valid_from = today

    mode = get_fee_calculation_mode()
    cycle = student.effective_payment_cycle
    fee = student.class_offering.fee if student.class_offering_id else None
    return Response({
        'studentId': student.id,
        'paymentCycle': cycle,
        'feeMode': mode,
        'amount': cycle_fee(fee, cycle, mode),
        'feeDisplay': format_fee_display(fee, cycle, mode) if fee else None,
        'validFrom': valid_from.isoformat(),
        'validTo': end_of_cycle(valid_from, cycle).isoformat(),
        'plannedSessions': sessions_for_cycle(cycle),
    })


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def payment_detail_view(request, pk):
    """GET/PUT/PATCH/DELETE /api/payments/{id}"""
    try:
        payment = _payments_queryset().get(pk=pk)
    except PaymentRecord.DoesNotExist:
        return Response({'detail': 'Không tìm thấy thanh toán'}, status=status.HTTP_404_NOT_FOUND)

    if request.method == 'GET':
        return Response(PaymentSerializer(payment).data)

    if request.method == 'DELETE':
        payment.delete()
        logger.info(f"[payment] Deleted payment_id={pk}")
        return Response({'detail': 'Xóa thanh toán thành công'})

    serializer = PaymentUpdateSerializer(payment, data=request.data, partial=request.method == 'PATCH')
    serializer.is_valid(raise_exception=True)
    payment = serializer.save()
    logger.info(f"[payment] Updated payment_id={pk} status={payment.status} amount={payment.amount}")
    return Response(PaymentSerializer(payment).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def payment_adjust_view(request, pk):
    """
    POST /api/payments/{id}/adjust  body: {actualSessions, plannedSessions?, reason?}
    Prorates the payment to the sessions actually attended.
    """
    try:
        payment = _payments_queryset().get(pk=pk)
    except PaymentRecord.DoesNotExist:
        return Response({'detail': 'Không tìm thấy thanh toán'}, status=status.HTTP_404_NOT_FOUND)

    serializer = PaymentAdjustSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    result = apply_proration(
        payment,
        serializer.validated_data['actualSessions'],
        planned_sessions=serializer.validated_data.get('plannedSessions'),
        reason=serializer.validated_data.get('reason') or '',
    )
    return Response({
        'payment': PaymentSerializer(payment).data,
        'originalAmount': result.original_amount,
        'adjustedAmount': result.adjusted_amount,
        'plannedSessions': result.planned_sessions,
        'actualSessions': result.actual_sessions,
        'adjusted': result.adjusted,
    })
