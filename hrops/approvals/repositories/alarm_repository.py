from datetime import datetime
from typing import Optional
from django.db.models import Q, QuerySet
from approvals.models import UserAlarm


def create_alarm(
    *,
    user_id: int,
    alarm_type: str,
    application_type: str,
    application_seq: int,
    message: str = "",
    redirect_url: str = "",
) -> UserAlarm:
    return UserAlarm.objects.create(
        user_id=user_id,
        alarm_type=alarm_type,
        application_type=application_type,
        application_seq=application_seq,
        message=(message or "")[:500],
        redirect_url=redirect_url or "",
        is_read=False,
    )

def get_or_none(alarm_seq: int) -> Optional[UserAlarm]:
    return UserAlarm.objects.filter(pk=alarm_seq).first()

def list_unread(user_id: int) -> QuerySet[UserAlarm]:
    return UserAlarm.objects.filter(user_id=user_id, is_read=False).order_by("-created_at", "-id")

def list_visible(user_id: int, read_since: Optional[datetime] = None) -> QuerySet[UserAlarm]:
    """Unread alarms plus read ones created at/after ``read_since`` (all of them when None)."""
    qs = UserAlarm.objects.filter(user_id=user_id)
    if read_since is not None:
        qs = qs.filter(Q(is_read=False) | Q(created_at__gte=read_since))
    return qs.order_by("-created_at", "-id")

def mark_read(alarm_seq: int) -> int:
    return UserAlarm.objects.filter(pk=alarm_seq, is_read=False).update(is_read=True)

def mark_all_read(user_id: int) -> int:
    return UserAlarm.objects.filter(user_id=user_id, is_read=False).update(is_read=True)
