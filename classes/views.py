"""
Class API views
"""
import logging

from django.db.models import Count, Q
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.services import get_fee_calculation_mode
from students.models import Student
from students.serializers import StudentSerializer
from .models import ClassOffering
from .serializers import ClassCloseSerializer, ClassOfferingSerializer
from .services import attended_class_ids, get_active_students_for_class, sort_classes_for_day

logger = logging.getLogger(__name__)


def _classes_queryset():
    return ClassOffering.objects.annotate(
        active_student_count=Count('students', filter=Q(students__status=Student.STATUS_ACTIVE)),
    )


def _get_class(pk):
    try:
        return _classes_queryset().get(pk=pk)
    except ClassOffering.DoesNotExist:
        return None


def _not_found():
    return Response({'detail': 'Không tìm thấy lớp học'}, status=status.HTTP_404_NOT_FOUND)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def classes_view(request):
    """
    GET /api/classes/?status=active|closed
    Sorted for today: scheduled and not yet attended first, then scheduled and attended, then the rest.
    POST /api/classes/
    """
    context = {'fee_mode': get_fee_calculation_mode()}

    if request.method == 'POST':
        serializer = ClassOfferingSerializer(data=request.data, context=context)
        serializer.is_valid(raise_exception=True)
        class_offering = serializer.save()
        logger.info(f"[class] Created class_id={class_offering.id} name={class_offering.name!r}")
        return Response(
            ClassOfferingSerializer(_get_class(class_offering.id), context=context).data,
            status=status.HTTP_201_CREATED,
        )

    classes = _classes_queryset()
    status_filter = request.query_params.get('status')
    if status_filter in (ClassOffering.STATUS_ACTIVE, ClassOffering.STATUS_CLOSED):
        classes = classes.filter(status=status_filter)
    classes = list(classes)

    today = timezone.localdate()
    attended = attended_class_ids(classes, today)
    ordered = sort_classes_for_day(classes, today, attended)

    data = []
    for class_offering, row in zip(ordered, ClassOfferingSerializer(ordered, many=True, context=context).data):
        row['scheduledToday'] = class_offering.is_scheduled_on(today)
        row['attendedToday'] = class_offering.id in attended
        data.append(row)
    return Response(data)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def class_detail_view(request, pk):
    """
    GET/PUT/PATCH /api/classes/{id}
    DELETE /api/classes/{id}: rejected while the class still has students
    """
    class_offering = _get_class(pk)
    if class_offering is None:
        return _not_found()
    context = {'fee_mode': get_fee_calculation_mode()}

    if request.method == 'GET':
        return Response(ClassOfferingSerializer(class_offering, context=context).data)

    if request.method == 'DELETE':
        student_count = class_offering.students.count()
        if student_count:
            return Response({
                'detail': 'Không thể xóa lớp học vì còn học sinh trong lớp',
                'code': 'class_has_students',
                'studentCount': student_count,
            }, status=status.HTTP_400_BAD_REQUEST)
        class_offering.delete()
        logger.info(f"[class] Deleted class_id={pk}")
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = ClassOfferingSerializer(
        class_offering, data=request.data, partial=request.method == 'PATCH', context=context,
    )
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return Response(ClassOfferingSerializer(_get_class(pk), context=context).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def class_close_view(request, pk):
    """POST /api/classes/{id}/close  body: {date?, reason?}"""
    class_offering = _get_class(pk)
    if class_offering is None:
        return _not_found()
    if class_offering.is_closed:
        return Response({'detail': 'Lớp học đã đóng'}, status=status.HTTP_400_BAD_REQUEST)

    serializer = ClassCloseSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    class_offering.status = ClassOffering.STATUS_CLOSED
    class_offering.closed_date = serializer.validated_data.get('date') or timezone.localdate()
    class_offering.closed_reason = serializer.validated_data.get('reason') or None
    class_offering.save(update_fields=['status', 'closed_date', 'closed_reason', 'updated_at'])
    logger.info(f"[class] Closed class_id={pk} on {class_offering.closed_date}")
    return Response(ClassOfferingSerializer(class_offering, context={'fee_mode': get_fee_calculation_mode()}).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def class_reopen_view(request, pk):
    """POST /api/classes/{id}/reopen"""
    class_offering = _get_class(pk)
    if class_offering is None:
        return _not_found()
    if not class_offering.is_closed:
        return Response({'detail': 'Lớp học đang hoạt động'}, status=status.HTTP_400_BAD_REQUEST)

    class_offering.status = ClassOffering.STATUS_ACTIVE
    class_offering.closed_date = None
    class_offering.closed_reason = None
    class_offering.save(update_fields=['status', 'closed_date', 'closed_reason', 'updated_at'])
    logger.info(f"[class] Reopened class_id={pk}")
    return Response(ClassOfferingSerializer(class_offering, context={'fee_mode': get_fee_calculation_mode()}).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def class_students_view(request, pk):
    """GET /api/classes/{id}/students?status=active"""
    class_offering = _get_class(pk)
    if class_offering is None:
        return _not_found()
    status_filter = request.query_params.get('status')
    if status_filter == Student.STATUS_ACTIVE:
        students = get_active_students_for_class(class_offering)
    else:
        students = Student.objects.filter(class_offering=class_offering)
        if status_filter:
            students = students.filter(status=status_filter)
    students = students.select_related('class_offering')
    return Response(StudentSerializer(students, many=True).data)
