from django.db import models
from .choices import ApplicationType, ApprovalStatus, RedirectUrl


class UserAlarm(models.Model):
    user_id = models.BigIntegerField(db_index=True)
    alarm_type = models.CharField(max_length=2, choices=ApprovalStatus.choices)
    application_type = models.CharField(max_length=20, choices=ApplicationType.choices)
    application_seq = models.BigIntegerField()
    message = models.CharField(max_length=500, blank=True, default="")
    is_read = models.BooleanField(default=False, db_index=True)
    redirect_url = models.CharField(max_length=200, choices=RedirectUrl.choices, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "tbl_users_alarm"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user_id", "is_read"], name="alarm_user_read_idx"),
            models.Index(fields=["application_type", "application_seq"], name="alarm_app_key_idx"),
        ]

    def __str__(self):
        state = "read" if self.is_read else "unread"
        return f"ALARM[{self.alarm_type}] to_user={self.user_id} {self.application_type}#{self.application_seq} ({state})"
