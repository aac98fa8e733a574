"""
Serializers for classes app
"""
from rest_framework import serializers

from core.services import DEFAULT_FEE_METHOD
from payments.services.cycle import PAYMENT_CYCLES
from payments.services.fees import format_fee_display
from .models import ClassOffering

MIN_CLASS_FEE = 1000


class ClassOfferingSerializer(serializers.ModelSerializer):
    """Class serializer. camelCase aliases for the frontend; lifecycle fields are read-only."""
    paymentCycle = serializers.ChoiceField(
        source='payment_cycle', choices=PAYMENT_CYCLES, required=False,
    )
    scheduleDays = serializers.ListField(source='schedule_days', child=serializers.IntegerField(), read_only=True)
    closedDate = serializers.DateField(source='closed_date', read_only=True)
    closedReason = serializers.CharField(source='closed_reason', read_only=True)
    studentCount = serializers.SerializerMethodField()
    feeDisplay = serializers.SerializerMethodField()

    class Meta:
        model = ClassOffering
        fields = [
            'id', 'name', 'fee', 'schedule', 'location', 'paymentCycle', 'scheduleDays',
            'status', 'closedDate', 'closedReason', 'studentCount', 'feeDisplay',
        ]
        read_only_fields = ['id', 'status']

    def get_studentCount(self, obj):
        annotated = getattr(obj, 'active_student_count', None)
        if annotated is not None:
            return annotated
        return obj.students.filter(status='active').count()

    def get_feeDisplay(self, obj):
        mode = self.context.get('fee_mode', DEFAULT_FEE_METHOD)
        return format_fee_display(obj.fee, obj.payment_cycle, mode)

    def validate_fee(self, value):
        if value < MIN_CLASS_FEE:
            raise serializers.ValidationError("Giá tiền phải lớn hơn 1.000 VND")
        return value

    def validate_schedule(self, value):
        value = (value or '').strip()
        if not value:
            raise serializers.ValidationError("Phải chọn ít nhất một ngày học")
        return value


class ClassCloseSerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
    reason = serializers.CharField(required=False, allow_blank=True)
