"""
Serializers for core app
"""
from rest_framework import serializers

from .models import Setting
from .services import FEE_METHOD_SETTING_KEY, FEE_METHODS


class SettingSerializer(serializers.ModelSerializer):
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Setting
        fields = ['id', 'key', 'value', 'description', 'updatedAt']
        read_only_fields = ['id']

    def validate(self, attrs):
        key = attrs.get('key', getattr(self.instance, 'key', None))
        value = attrs.get('value', getattr(self.instance, 'value', None))
        if key == FEE_METHOD_SETTING_KEY and value not in FEE_METHODS:
            raise serializers.ValidationError(
                {'value': f"Giá trị không hợp lệ. Chọn một trong: {', '.join(FEE_METHODS)}"}
            )
        return attrs
