# -*- coding: utf-8 -*-
"""
Repository layer for the four application tables (pure DB):
- one ApplicationAccessor per ApplicationType, same interface for every table
- row lock + compare-and-swap on approval_status
- NO business rules (who may decide, which transition is legal): the service decides.
"""
from __future__ import annotations
import operator
from dataclasses import dataclass
from functools import reduce
from typing import Any, Dict, Iterable, Optional, Type

from django.db.models import Q, QuerySet

from approvals.exceptions import InvalidStateError, NotFound
from approvals.models import (
    ApplicationType, ApprovalStatus, ApprovalTrackedModel, Employee,
    VacationHistory, ExpenseClaim, RentalSupport, RentalProposal,
)


@dataclass(frozen=True)
class ApplicationSnapshot:
    application_type: ApplicationType
    seq: int
    user_id: int
    division: str
    team: str
    approval_status: ApprovalStatus


def _status_q(status: ApprovalStatus) -> Q:
    # legacy rows keep NULL for a fresh submission
    if status == ApprovalStatus.SUBMITTED:
        return Q(approval_status=status) | Q(approval_status__isnull=True)
    return Q(approval_status=status)


def _statuses_q(statuses: Iterable[ApprovalStatus]) -> Q:
    return reduce(operator.or_, (_status_q(s) for s in statuses))


class ApplicationAccessor:
    """Keyed read/write access to one application table."""

    def __init__(self, application_type: ApplicationType, model: Type[ApprovalTrackedModel]):
        self.application_type = application_type
        self.model = model

    def __repr__(self):
        return f"<ApplicationAccessor {self.application_type} → {self.model.__name__}>"

    # ============================
    # Base queries
    # ============================
    def base_qs(self) -> QuerySet:
        return self.model.objects.all()

    def get_row(self, seq: int) -> ApprovalTrackedModel:
        obj = self.base_qs().filter(pk=seq).first()
        if obj is None:
            raise NotFound(
                f"{self.application_type.label} #{seq} does not exist.",
                {"application_type": self.application_type.value, "application_seq": seq},
            )
        return obj

    def get(self, seq: int) -> ApplicationSnapshot:
        return self._snapshot(self.get_row(seq))

    def lock(self, seq: int) -> ApplicationSnapshot:
        """SELECT ... FOR UPDATE; call inside transaction.atomic()."""
        obj = self.base_qs().select_for_update().filter(pk=seq).first()
        if obj is None:
            raise NotFound(
                f"{self.application_type.label} #{seq} does not exist.",
                {"application_type": self.application_type.value, "application_seq": seq},
            )
        return self._snapshot(obj)

    def pending_qs(self, statuses: Iterable[ApprovalStatus], user_ids: Optional[QuerySet] = None) -> QuerySet:
        qs = self.base_qs().filter(_statuses_q(statuses))
        if user_ids is not None:
            qs = qs.filter(user_id__in=user_ids)
        return qs.order_by("-created_at", "-pk")

    # ============================
    # Mutations
    # ============================
    def compare_and_set_status(
        self, seq: int, expected: ApprovalStatus, new: ApprovalStatus, **fields: Any
    ) -> bool:
        """UPDATE ... WHERE approval_status = expected. False when another writer got there first."""
        updated = (
            self.base_qs()
            .filter(Q(pk=seq) & _status_q(expected))
            .update(approval_status=new, **fields)
        )
        return updated == 1

    # ============================
    # Helpers
    # ============================
    def _snapshot(self, obj: ApprovalTrackedModel) -> ApplicationSnapshot:
        try:
            status = ApprovalStatus.from_stored(obj.approval_status)
        except ValueError:
            # e.g. legacy "D" rows
            raise InvalidStateError(
                f"{self.application_type.label} #{obj.pk} has an unknown status {obj.approval_status!r}.",
                {"approval_status": obj.approval_status},
            ) from None
        emp = Employee.objects.filter(user_id=obj.user_id).only("division", "team").first()
        return ApplicationSnapshot(
            application_type=self.application_type,
            seq=obj.pk,
            user_id=obj.user_id,
            division=emp.division if emp else "",
            team=emp.team if emp else "",
            approval_status=status,
        )


_REGISTRY: Dict[ApplicationType, ApplicationAccessor] = {
    ApplicationType.VACATION: ApplicationAccessor(ApplicationType.VACATION, VacationHistory),
    ApplicationType.EXPENSE: ApplicationAccessor(ApplicationType.EXPENSE, ExpenseClaim),
    ApplicationType.RENTAL_SUPPORT: ApplicationAccessor(ApplicationType.RENTAL_SUPPORT, RentalSupport),
    ApplicationType.RENTAL_PROPOSAL: ApplicationAccessor(ApplicationType.RENTAL_PROPOSAL, RentalProposal),
}


def get_accessor(application_type) -> ApplicationAccessor:
    try:
        return _REGISTRY[ApplicationType(application_type)]
    except (KeyError, ValueError):
        raise NotFound(f"Unknown application type: {application_type!r}") from None
