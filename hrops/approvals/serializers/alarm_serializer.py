from rest_framework import serializers
from approvals.models import UserAlarm


class UserAlarmSerializer(serializers.ModelSerializer):
    alarm_type_display = serializers.CharField(source="get_alarm_type_display", read_only=True)

    class Meta:
        model = UserAlarm
        fields = [
            "id", "user_id", "alarm_type", "alarm_type_display",
            "application_type", "application_seq", "message",
            "is_read", "redirect_url", "created_at",
        ]
        read_only_fields = fields


class MarkAllReadSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
