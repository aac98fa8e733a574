"""
Serializers for attendance app
"""
from rest_framework import serializers

from students.models import Student
from .models import AttendanceRecord

ATTENDANCE_STATUSES = [code for code, _ in AttendanceRecord.STATUS_CHOICES]


class AttendanceRecordSerializer(serializers.ModelSerializer):
    """Attendance record. studentId is writable; name/code/class are for listings."""
    studentId = serializers.PrimaryKeyRelatedField(source='student', queryset=Student.objects.all())
    studentName = serializers.CharField(source='student.name', read_only=True)
    studentCode = serializers.CharField(source='student.code', read_only=True)
    classId = serializers.IntegerField(source='student.class_offering_id', read_only=True)
    status = serializers.ChoiceField(choices=ATTENDANCE_STATUSES)

    class Meta:
        model = AttendanceRecord
        fields = ['id', 'studentId', 'studentName', 'studentCode', 'classId', 'date', 'status']
        read_only_fields = ['id']


class AttendanceBulkDeleteSerializer(serializers.Serializer):
    ids = serializers.ListField(allow_empty=False)
