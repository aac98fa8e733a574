"""
Serializers for payments app
"""
from django.utils import timezone
from rest_framework import serializers

from core.services import DEFAULT_FEE_METHOD
from payments.services.cycle import end_of_cycle, sessions_for_cycle
from payments.services.fees import cycle_fee
from students.models import Student
from .models import PaymentRecord

PAYMENT_STATUSES = [code for code, _ in PaymentRecord.STATUS_CHOICES]


class PaymentSerializer(serializers.ModelSerializer):
    """Payment serializer. camelCase keys; studentName/studentCode for listings."""
    studentId = serializers.IntegerField(source='student.id', read_only=True)
    studentName = serializers.CharField(source='student.name', read_only=True)
    studentCode = serializers.CharField(source='student.code', read_only=True)
    paymentDate = serializers.DateField(source='payment_date', read_only=True)
    validFrom = serializers.DateField(source='valid_from', read_only=True)
    validTo = serializers.DateField(source='valid_to', read_only=True)
    plannedSessions = serializers.IntegerField(source='planned_sessions', read_only=True)
    actualSessions = serializers.IntegerField(source='actual_sessions', read_only=True)
    adjustmentReason = serializers.CharField(source='adjustment_reason', read_only=True)

    class Meta:
        model = PaymentRecord
        fields = [
            'id', 'studentId', 'studentName', 'studentCode', 'amount', 'paymentDate',
            'validFrom', 'validTo', 'status', 'plannedSessions', 'actualSessions',
            'adjustmentReason', 'notes',
        ]
        read_only_fields = fields


class PaymentCreateSerializer(serializers.Serializer):
    """
    Payment create (frontend format).
    Omitted amount / validTo / plannedSessions are filled from the student's
    cycle and class fee; the fee mode comes from context['fee_mode'].
    """
    studentId = serializers.PrimaryKeyRelatedField(queryset=Student.objects.select_related('class_offering'))
    amount = serializers.IntegerField(required=False, min_value=1)
    paymentDate = serializers.DateField(required=False)
    validFrom = serializers.DateField(required=False)
    validTo = serializers.DateField(required=False)
    status = serializers.ChoiceField(choices=PAYMENT_STATUSES, required=False, default=PaymentRecord.STATUS_PAID)
    plannedSessions = serializers.IntegerField(required=False, min_value=1)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate(self, attrs):
        student = attrs['studentId']
        cycle = student.effective_payment_cycle
        today = timezone.localdate()

        attrs.setdefault('paymentDate', today)
        attrs.setdefault('validFrom', attrs['paymentDate'])
        attrs.setdefault('validTo', end_of_cycle(attrs['validFrom'], cycle))
        attrs.setdefault('plannedSessions', sessions_for_cycle(cycle))
        if attrs['validFrom'] > attrs['validTo']:
            raise serializers.ValidationError({'validTo': 'Ngày kết thúc phải sau ngày bắt đầu'})

        if 'amount' not in attrs:
            mode = self.context.get('fee_mode', DEFAULT_FEE_METHOD)
            fee = student.class_offering.fee if student.class_offering_id else None
            amount = cycle_fee(fee, cycle, mode)
            if amount <= 0:
                raise serializers.ValidationError({'amount': 'Học sinh chưa có lớp, vui lòng nhập số tiền'})
            attrs['amount'] = amount
        return attrs

    def create(self, validated_data):
        return PaymentRecord.objects.create(
            student=validated_data['studentId'],
            amount=validated_data['amount'],
            payment_date=validated_data['paymentDate'],
            valid_from=validated_data['validFrom'],
            valid_to=validated_data['validTo'],
            status=validated_data['status'],
            planned_sessions=validated_data['plannedSessions'],
            notes=validated_data.get('notes') or None,
        )


class PaymentUpdateSerializer(serializers.ModelSerializer):
    """Partial or full update of an existing payment."""
    paymentDate = serializers.DateField(source='payment_date', required=False)
    validFrom = serializers.DateField(source='valid_from', required=False)
    validTo = serializers.DateField(source='valid_to', required=False)
    status = serializers.ChoiceField(choices=PAYMENT_STATUSES, required=False)
    plannedSessions = serializers.IntegerField(source='planned_sessions', required=False, allow_null=True, min_value=1)
    actualSessions = serializers.IntegerField(source='actual_sessions', required=False, allow_null=True, min_value=0)
    adjustmentReason = serializers.CharField(source='adjustment_reason', required=False, allow_blank=True, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    class Meta:
        model = PaymentRecord
        fields = [
            'amount', 'paymentDate', 'validFrom', 'validTo', 'status',
            'plannedSessions', 'actualSessions', 'adjustmentReason', 'notes',
        ]
        extra_kwargs = {'amount': {'required': False, 'min_value': 1}}

    def validate(self, attrs):
        valid_from = attrs.get('valid_from', getattr(self.instance, 'valid_from', None))
        valid_to = attrs.get('valid_to', getattr(self.instance, 'valid_to', None))
        if valid_from and valid_to and valid_from > valid_to:
            raise serializers.ValidationError({'validTo': 'Ngày kết thúc phải sau ngày bắt đầu'})
        return attrs


class PaymentAdjustSerializer(serializers.Serializer):
    actualSessions = serializers.IntegerField(min_value=0)
    plannedSessions = serializers.IntegerField(required=False, min_value=1)
    reason = serializers.CharField(required=False, allow_blank=True, default='')


def payment_status_data(result):
    """PaymentStatusResult -> response dict."""
    return {
        'status': result.status,
        'nextDueFrom': result.next_due_from.isoformat() if result.next_due_from else None,
        'nextDueTo': result.next_due_to.isoformat() if result.next_due_to else None,
        'latestPayment': PaymentSerializer(result.latest_payment).data if result.latest_payment else None,
    }


def payment_standing_data(standing):
    return {
        'status': standing.status,
        'dueAmount': standing.due_amount,
        'unpaidAmount': standing.unpaid_amount,
        'overdueAmount': standing.overdue_amount,
    }
