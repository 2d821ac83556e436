from datetime import timedelta
from django.conf import settings
from django.db.models import QuerySet
from django.utils import timezone
from approvals.repositories import alarm_repository as repo


def unread_alarms(user_id: int) -> QuerySet:
    return repo.list_unread(user_id)

def all_alarms(user_id: int) -> QuerySet:
    """Newest first; read alarms older than the retention window are hidden (not deleted)."""
    days = getattr(settings, "APPROVAL_ALARM_READ_RETENTION_DAYS", 3)
    read_since = timezone.now() - timedelta(days=days) if days is not None else None
    return repo.list_visible(user_id, read_since=read_since)
