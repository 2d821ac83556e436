from typing import Optional
from django.db.models import QuerySet
from approvals.models import ApprovalRejection


def create_rejection(
    *, application_type: str, application_seq: int, rejected_by: int,
    rejection_level: str, rejection_reason: str,
) -> ApprovalRejection:
    return ApprovalRejection.objects.create(
        application_type=application_type,
        application_seq=application_seq,
        rejected_by=rejected_by,
        rejection_level=rejection_level,
        rejection_reason=rejection_reason,
    )

def list_for_key(application_type: str, application_seq: int) -> QuerySet[ApprovalRejection]:
    return (
        ApprovalRejection.objects
        .filter(application_type=application_type, application_seq=application_seq)
        .order_by("-created_at", "-id")
    )

def latest_for_key(application_type: str, application_seq: int) -> Optional[ApprovalRejection]:
    return list_for_key(application_type, application_seq).first()
