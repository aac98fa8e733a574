"""
Serializers for students app
"""
from rest_framework import serializers

from classes.models import ClassOffering
from payments.services.cycle import PAYMENT_CYCLES
from .models import Student


class StudentSerializer(serializers.ModelSerializer):
    """
    Student serializer. classId/paymentCycle are the frontend names.
    Suspension fields are managed by the lifecycle endpoints and read-only here.
    """
    classId = serializers.PrimaryKeyRelatedField(
        source='class_offering', queryset=ClassOffering.objects.all(),
        required=False, allow_null=True,
    )
    className = serializers.CharField(source='class_offering.name', read_only=True, default=None)
    registrationDate = serializers.DateField(source='registration_date', required=False)
    paymentCycle = serializers.ChoiceField(
        source='payment_cycle', choices=PAYMENT_CYCLES, required=False, allow_null=True,
    )
    effectivePaymentCycle = serializers.CharField(source='effective_payment_cycle', read_only=True)
    status = serializers.ChoiceField(
        choices=[Student.STATUS_ACTIVE, Student.STATUS_INACTIVE], required=False,
    )
    suspendDate = serializers.DateField(source='suspend_date', read_only=True)
    suspendReason = serializers.CharField(source='suspend_reason', read_only=True)
    restartDate = serializers.DateField(source='restart_date', read_only=True)
    lastActiveDate = serializers.DateField(source='last_active_date', read_only=True)
    suspendHistory = serializers.JSONField(source='suspend_history', read_only=True)

    class Meta:
        model = Student
        fields = [
            'id', 'name', 'code', 'phone', 'classId', 'className', 'registrationDate',
            'paymentCycle', 'effectivePaymentCycle', 'status', 'suspendDate', 'suspendReason',
            'restartDate', 'lastActiveDate', 'suspendHistory',
        ]
        read_only_fields = ['id']

    def validate_phone(self, value):
        value = (value or '').strip()
        if len(value) < 10:
            raise serializers.ValidationError("Số điện thoại phải có ít nhất 10 ký tự")
        return value

    def validate_code(self, value):
        return (value or '').strip()

    def validate_classId(self, value):
        current = self.instance.class_offering_id if self.instance else None
        if value is not None and value.is_closed and value.id != current:
            raise serializers.ValidationError("Lớp học đã đóng")
        return value

    def validate_status(self, value):
        # Suspended students change state only through suspend/restart
        if self.instance and self.instance.status == Student.STATUS_SUSPENDED and value == Student.STATUS_ACTIVE:
            raise serializers.ValidationError("Dùng chức năng học lại cho học sinh đang tạm nghỉ")
        return value

    def to_representation(self, instance):
        data = super().to_representation(instance)
        payment_status = self.context.get('payment_statuses', {}).get(instance.id)
        if payment_status is not None:
            data['paymentStatus'] = payment_status
        return data


class SuspendSerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
    reason = serializers.CharField(required=False, allow_blank=True)


class RestartSerializer(serializers.Serializer):
    date = serializers.DateField(required=False)


class WithdrawSerializer(serializers.Serializer):
    actualSessions = serializers.IntegerField(required=False, min_value=0, allow_null=True)
    reason = serializers.CharField(required=False, allow_blank=True)
    date = serializers.DateField(required=False)
