"""
Attendance API.
Endpoints:
- GET    /attendance/?date=  or  ?from=&to=      Records for a day or a date range
- POST   /attendance/                            Mark one student
- GET    /attendance/student/{student_id}        History + summary + per-day grouping
- GET    /attendance/today                       Marked today + students still to mark
- PATCH  /attendance/{id}                        Update
- DELETE /attendance/{id}                        Delete
- POST   /attendance/bulk-delete                 Batch delete with per-item results
"""
import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from classes.models import ClassOffering
from classes.services import get_active_students_for_class
from core.utils import parse_iso_date
from students.models import Student
from attendance.models import AttendanceRecord
from attendance.serializers import AttendanceBulkDeleteSerializer, AttendanceRecordSerializer
from attendance.services.aggregation import group_by_date, summarize
from attendance.services.bulk import bulk_delete_attendance

logger = logging.getLogger(__name__)


def _records_queryset():
    return AttendanceRecord.objects.select_related('student')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def attendance_view(request):
    """
    GET  /api/attendance/?date=YYYY-MM-DD | ?from=&to= [&classId=]
    POST /api/attendance/  body: {studentId, date, status}
    Duplicate records for the same student and day are accepted.
    """
    if request.method == 'POST':
        serializer = AttendanceRecordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = serializer.save()
        logger.info(f"[attendance] Marked student_id={record.student_id} date={record.date} status={record.status}")
        return Response(AttendanceRecordSerializer(record).data, status=status.HTTP_201_CREATED)

    records = _records_queryset()
    day = parse_iso_date(request.query_params.get('date'))
    date_from = parse_iso_date(request.query_params.get('from'))
    date_to = parse_iso_date(request.query_params.get('to'))
    if request.query_params.get('date') and day is None:
        return Response(
            {'detail': 'Ngày tháng không hợp lệ. Vui lòng sử dụng định dạng YYYY-MM-DD'},
            status=status.HTTP_400_BAD_REQUEST,
        )
    if day:
        records = records.filter(date=day)
    else:
        if date_from:
            records = records.filter(date__gte=date_from)
        if date_to:
            records = records.filter(date__lte=date_to)
    class_id = request.query_params.get('classId')
    if class_id and str(class_id).isdigit():
        records = records.filter(student__class_offering_id=int(class_id))
    return Response(AttendanceRecordSerializer(records, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def attendance_by_student_view(request, student_id):
    """GET /api/attendance/student/{studentId}?from=&to="""
    if not Student.objects.filter(pk=student_id).exists():
        return Response({'detail': 'Không tìm thấy học sinh'}, status=status.HTTP_404_NOT_FOUND)
    records = _records_queryset().filter(student_id=student_id)
    date_from = parse_iso_date(request.query_params.get('from'))
    date_to = parse_iso_date(request.query_params.get('to'))
    if date_from:
        records = records.filter(date__gte=date_from)
    if date_to:
        records = records.filter(date__lte=date_to)
    records = list(records)

    return Response({
        'records': AttendanceRecordSerializer(records, many=True).data,
        'summary': summarize(records),
        'byDate': [
            {'date': day.isoformat(), 'records': AttendanceRecordSerializer(items, many=True).data}
            for day, items in group_by_date(records).items()
        ],
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def attendance_today_view(request):
    """
    GET /api/attendance/today
    markedAttendance: today's records.
    studentsForToday: active students of open classes scheduled today with no record yet.
    """
    today = timezone.localdate()
    marked = list(_records_queryset().filter(date=today))
    marked_ids = {r.student_id for r in marked}

    students_for_today = []
    classes = ClassOffering.objects.filter(status=ClassOffering.STATUS_ACTIVE)
    for class_offering in classes:
        if not class_offering.is_scheduled_on(today):
            continue
        students = get_active_students_for_class(class_offering)
        for student in students:
            if student.id in marked_ids:
                continue
            students_for_today.append({
                'id': student.id,
                'name': student.name,
                'code': student.code,
                'classId': class_offering.id,
                'className': class_offering.name,
                'schedule': class_offering.schedule,
            })
    logger.debug(f"[attendance_today] date={today}, marked={len(marked)}, pending={len(students_for_today)}")

    return Response({
        'date': today.isoformat(),
        'markedAttendance': AttendanceRecordSerializer(marked, many=True).data,
        'studentsForToday': students_for_today,
    })


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def attendance_detail_view(request, pk):
    """GET/PATCH/DELETE /api/attendance/{id}"""
    try:
        record = _records_queryset().get(pk=pk)
    except AttendanceRecord.DoesNotExist:
        return Response({'detail': 'Không tìm thấy bản ghi điểm danh'}, status=status.HTTP_404_NOT_FOUND)

    if request.method == 'GET':
        return Response(AttendanceRecordSerializer(record).data)

    if request.method == 'DELETE':
        record.delete()
        logger.info(f"[attendance] Deleted id={pk}")
        return Response({'detail': 'Xóa điểm danh thành công', 'id': pk})

    serializer = AttendanceRecordSerializer(record, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    record = serializer.save()
    return Response(AttendanceRecordSerializer(record).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def attendance_bulk_delete_view(request):
    """
    POST /api/attendance/bulk-delete  body: {ids: [..]}
    Always 200 with per-item results; one failed id never aborts the others.
    """
    serializer = AttendanceBulkDeleteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    results = bulk_delete_attendance(serializer.validated_data['ids'])
    return Response({
        'results': results,
        'deleted': sum(1 for r in results if r['ok']),
        'failed': sum(1 for r in results if not r['ok']),
    })
