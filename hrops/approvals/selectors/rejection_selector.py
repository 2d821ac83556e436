from typing import Optional
from django.db.models import QuerySet
from approvals.models import ApprovalRejection
from approvals.repositories import rejection_repository as repo
from approvals.repositories.application_repository import get_accessor


def _existing_key(application_type, application_seq: int):
    # NotFound for an unknown type or a seq with no row
    accessor = get_accessor(application_type)
    row = accessor.get_row(int(application_seq))
    return accessor.application_type, row.pk

def latest_rejection(application_type, application_seq: int) -> Optional[ApprovalRejection]:
    """Reason currently shown to the applicant."""
    return repo.latest_for_key(*_existing_key(application_type, application_seq))

def rejection_history(application_type, application_seq: int) -> QuerySet[ApprovalRejection]:
    return repo.list_for_key(*_existing_key(application_type, application_seq))
