# -*- coding: utf-8 -*-
"""
Pending-approval aggregator (read-only):
- resolves the actor's scope: which statuses, which applicants
- queries each of the four application tables independently
- projects rows into one PendingItem shape (fields that do not apply stay None)
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple

from django.conf import settings
from django.db.models import QuerySet

from approvals.models import ApplicationType, ApprovalStatus, RoleLevel
from approvals.repositories import employee_repository
from approvals.repositories.application_repository import get_accessor
from approvals.selectors.actor_selector import Actor

TEAM_LEADER_PENDING: FrozenSet[ApprovalStatus] = frozenset({ApprovalStatus.SUBMITTED, ApprovalStatus.RESUBMITTED})
DIVISION_HEAD_PENDING: FrozenSet[ApprovalStatus] = frozenset({ApprovalStatus.TEAM_LEADER_APPROVED})
ADMIN_PENDING: FrozenSet[ApprovalStatus] = TEAM_LEADER_PENDING | DIVISION_HEAD_PENDING


@dataclass
class PendingItem:
    application_type: str
    seq: int
    user_id: int
    applicant: str
    approval_status: str
    created_at: datetime
    # vacation
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    period: Optional[Decimal] = None
    vacation_type: Optional[str] = None
    reason: Optional[str] = None
    used_vacation_days: Optional[Decimal] = None
    # expense / rental support
    request_date: Optional[date] = None
    billing_yy_month: Optional[int] = None
    child_cnt: Optional[int] = None
    total_amount: Optional[int] = None
    payment_date: Optional[date] = None
    # rental support / proposal
    contract_start_date: Optional[date] = None
    contract_end_date: Optional[date] = None
    contract_monthly_rent: Optional[int] = None
    billing_amount: Optional[int] = None
    # rental proposal
    previous_address: Optional[str] = None
    rental_address: Optional[str] = None
    billing_start_date: Optional[date] = None
    billing_reason: Optional[str] = None


@dataclass
class ApplicationList:
    items: List[PendingItem] = field(default_factory=list)
    total_count: int = 0


@dataclass
class PendingApprovalView:
    vacation: ApplicationList = field(default_factory=ApplicationList)
    expense: ApplicationList = field(default_factory=ApplicationList)
    rental: ApplicationList = field(default_factory=ApplicationList)
    rental_proposal: ApplicationList = field(default_factory=ApplicationList)


# ====== Per-type payload projection ======
_PAYLOAD_FIELDS: Dict[ApplicationType, Tuple[str, ...]] = {
    ApplicationType.VACATION: (
        "start_date", "end_date", "period", "vacation_type", "reason", "used_vacation_days",
    ),
    ApplicationType.EXPENSE: (
        "request_date", "billing_yy_month", "child_cnt", "total_amount",
    ),
    ApplicationType.RENTAL_SUPPORT: (
        "request_date", "billing_yy_month", "contract_start_date", "contract_end_date",
        "contract_monthly_rent", "billing_amount", "payment_date",
    ),
    ApplicationType.RENTAL_PROPOSAL: (
        "previous_address", "rental_address", "contract_start_date", "contract_end_date",
        "contract_monthly_rent", "billing_amount", "billing_start_date", "billing_reason",
    ),
}


def _project(application_type: ApplicationType, row: Any, names: Dict[int, str]) -> PendingItem:
    payload = {name: getattr(row, name) for name in _PAYLOAD_FIELDS[application_type]}
    return PendingItem(
        application_type=application_type.value,
        seq=row.pk,
        user_id=row.user_id,
        applicant=names.get(row.user_id, ""),
        approval_status=ApprovalStatus.from_stored(row.approval_status).value,
        created_at=row.created_at,
        **payload,
    )


# ====== Scope ======
def _admin_scope(actor: Actor):
    return ADMIN_PENDING, None

def _division_head_scope(actor: Actor):
    if not actor.division:
        return None
    return DIVISION_HEAD_PENDING, employee_repository.user_ids_in_scope(actor.division)

def _team_leader_scope(actor: Actor):
    if not actor.division or not actor.team:
        return None
    return TEAM_LEADER_PENDING, employee_repository.user_ids_in_scope(actor.division, actor.team)

# a scope of None (blank team or division) matches nothing the actor could decide
_SCOPES: Dict[RoleLevel, Callable[[Actor], Optional[Tuple[FrozenSet[ApprovalStatus], Optional[QuerySet]]]]] = {
    RoleLevel.ADMIN: _admin_scope,
    RoleLevel.DIVISION_HEAD: _division_head_scope,
    RoleLevel.TEAM_LEADER: _team_leader_scope,
}


def _page_bounds(page: Optional[int], size: Optional[int]) -> Tuple[int, Optional[int]]:
    if not size:
        return 0, None
    max_size = getattr(settings, "APPROVAL_PENDING_MAX_PAGE_SIZE", 200)
    size = max(1, min(int(size), max_size))
    page = max(1, int(page or 1))
    start = (page - 1) * size
    return start, start + size


def _build_list(
    application_type: ApplicationType,
    statuses: FrozenSet[ApprovalStatus],
    user_ids: Optional[QuerySet],
    start: int,
    stop: Optional[int],
) -> ApplicationList:
    qs = get_accessor(application_type).pending_qs(statuses, user_ids=user_ids)
    total = qs.count()
    rows = list(qs[start:stop]) if stop is not None else list(qs[start:])
    names = employee_repository.names_map(r.user_id for r in rows)
    return ApplicationList(
        items=[_project(application_type, r, names) for r in rows],
        total_count=total,
    )


def list_pending(
    actor: Actor,
    *,
    application_type: Optional[ApplicationType] = None,
    page: Optional[int] = None,
    size: Optional[int] = None,
) -> PendingApprovalView:
    """
    Items waiting for this actor's decision, one list per application type.
    Actors without an approver role, or whose team/division is blank, get four empty lists.
    """
    view = PendingApprovalView()
    scope = _SCOPES.get(actor.role)
    resolved = scope(actor) if scope else None
    if resolved is None:
        return view

    statuses, user_ids = resolved
    start, stop = _page_bounds(page, size)
    types = [ApplicationType(application_type)] if application_type else list(ApplicationType)
    for t in types:
        setattr(view, t.list_key, _build_list(t, statuses, user_ids, start, stop))
    return view
