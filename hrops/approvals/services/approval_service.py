# -*- coding: utf-8 -*-
"""
Approval engine, one state machine for all four application types:
- decision level comes from the CURRENT status (A/AM → team leader, B → division head)
- who may decide: role + team/division scope (admin overrides both)
- status write, rejection ledger row and alarms commit together or not at all
- row lock + compare-and-swap: of two concurrent decisions on one key, the second
  sees the new status and fails with InvalidStateError
"""
from __future__ import annotations
from typing import Dict, Optional, Tuple
import logging

from django.db import transaction
from django.utils import timezone

from approvals.exceptions import ForbiddenError, InvalidStateError, ValidationError
from approvals.models import ApprovalAction, ApprovalStatus, RejectionLevel, RoleLevel
from approvals.repositories import rejection_repository
from approvals.repositories.application_repository import ApplicationSnapshot, get_accessor
from approvals.selectors.actor_selector import Actor
from approvals.services import alarm_service as alarms

logger = logging.getLogger(__name__)

# ====== State table ======
_DECISION_LEVEL: Dict[ApprovalStatus, RejectionLevel] = {
    ApprovalStatus.SUBMITTED: RejectionLevel.TEAM_LEADER,
    ApprovalStatus.RESUBMITTED: RejectionLevel.TEAM_LEADER,
    ApprovalStatus.TEAM_LEADER_APPROVED: RejectionLevel.DIVISION_HEAD,
}

# level → (status on approve, status on reject)
_OUTCOMES: Dict[RejectionLevel, Tuple[ApprovalStatus, ApprovalStatus]] = {
    RejectionLevel.TEAM_LEADER: (ApprovalStatus.TEAM_LEADER_APPROVED, ApprovalStatus.TEAM_LEADER_REJECTED),
    RejectionLevel.DIVISION_HEAD: (ApprovalStatus.DIVISION_HEAD_APPROVED, ApprovalStatus.DIVISION_HEAD_REJECTED),
}

_REQUIRED_ROLE: Dict[RejectionLevel, RoleLevel] = {
    RejectionLevel.TEAM_LEADER: RoleLevel.TEAM_LEADER,
    RejectionLevel.DIVISION_HEAD: RoleLevel.DIVISION_HEAD,
}

RESUBMITTABLE = frozenset({ApprovalStatus.TEAM_LEADER_REJECTED, ApprovalStatus.DIVISION_HEAD_REJECTED})

# approval trail columns written on approve
_TRAIL_FIELDS: Dict[RejectionLevel, Tuple[str, str]] = {
    RejectionLevel.TEAM_LEADER: ("tl_approved_by", "tl_approved_at"),
    RejectionLevel.DIVISION_HEAD: ("dh_approved_by", "dh_approved_at"),
}


def decision_level(status: ApprovalStatus) -> RejectionLevel:
    level = _DECISION_LEVEL.get(status)
    if level is None:
        raise InvalidStateError(
            f"Application in status {status} cannot be decided (already processed).",
            {"approval_status": str(status)},
        )
    return level


def _in_scope(actor: Actor, app: ApplicationSnapshot, level: RejectionLevel) -> bool:
    if not actor.division or actor.division != app.division:
        return False
    if level == RejectionLevel.TEAM_LEADER:
        return bool(actor.team) and actor.team == app.team
    return True


def authorize(actor: Actor, app: ApplicationSnapshot, level: RejectionLevel) -> None:
    if actor.is_admin:
        return
    if actor.role != _REQUIRED_ROLE[level]:
        raise ForbiddenError(
            f"Only a {level.label.lower()} can take this decision.",
            {"user_id": actor.user_id, "role": str(actor.role), "level": str(level)},
        )
    if not _in_scope(actor, app, level):
        scope = "team" if level == RejectionLevel.TEAM_LEADER else "division"
        raise ForbiddenError(
            f"Only applications from your own {scope} can be decided.",
            {"user_id": actor.user_id, "applicant": app.user_id},
        )


def _parse_action(action) -> ApprovalAction:
    try:
        return ApprovalAction(str(action).upper())
    except ValueError:
        raise ValidationError(f"Unknown action: {action!r}", {"action": action}) from None


# ====== Business services ======
def transition(
    application_type,
    application_seq: int,
    actor: Actor,
    action,
    reason: Optional[str] = None,
) -> ApprovalStatus:
    """Apply one approver decision and its side effects; returns the new status."""
    action = _parse_action(action)
    accessor = get_accessor(application_type)
    logger.info(
        "[approval] %s %s#%s by user=%s role=%s",
        action, accessor.application_type, application_seq, actor.user_id, actor.role,
    )

    reason = (reason or "").strip()

    with transaction.atomic():
        app = accessor.lock(application_seq)
        # an unknown key is reported before a blank reason
        if action == ApprovalAction.REJECT and not reason:
            raise ValidationError("A rejection reason is required.", {"field": "reason"})
        try:
            level = decision_level(app.approval_status)
            authorize(actor, app, level)
        except (InvalidStateError, ForbiddenError) as ex:
            logger.warning("[approval] refused %s#%s: %s", app.application_type, app.seq, ex.message)
            raise

        approved, rejected = _OUTCOMES[level]
        if action == ApprovalAction.APPROVE:
            new_status = approved
            by_field, at_field = _TRAIL_FIELDS[level]
            extra = {by_field: actor.user_id, at_field: timezone.now()}
        else:
            new_status = rejected
            extra = {}

        if not accessor.compare_and_set_status(app.seq, app.approval_status, new_status, **extra):
            logger.warning("[approval] lost race on %s#%s (expected %s)", app.application_type, app.seq, app.approval_status)
            raise InvalidStateError(
                "Application was already processed by someone else.",
                {"application_type": str(app.application_type), "application_seq": app.seq},
            )

        if action == ApprovalAction.REJECT:
            rejection_repository.create_rejection(
                application_type=app.application_type,
                application_seq=app.seq,
                rejected_by=actor.user_id,
                rejection_level=level,
                rejection_reason=reason,
            )
            alarms.notify_applicant(app, new_status, alarms.msg_rejected(app, reason))
        elif level == RejectionLevel.TEAM_LEADER:
            alarms.notify_applicant(app, new_status, alarms.msg_team_leader_approved(app))
            alarms.notify_division_heads(app, ApprovalStatus.SUBMITTED, alarms.msg_pending_division_head(app))
        else:
            alarms.notify_applicant(app, new_status, alarms.msg_final_approved(app))

    logger.info("[approval] %s#%s %s → %s", app.application_type, app.seq, app.approval_status, new_status)
    return new_status


def resubmit(application_type, application_seq: int, actor: Actor) -> ApprovalStatus:
    """Applicant puts a rejected application back in front of the first approver (status AM)."""
    accessor = get_accessor(application_type)

    with transaction.atomic():
        app = accessor.lock(application_seq)
        if actor.user_id != app.user_id:
            logger.warning("[approval] resubmit of %s#%s by non-owner user=%s", app.application_type, app.seq, actor.user_id)
            raise ForbiddenError(
                "Only the applicant can resubmit an application.",
                {"user_id": actor.user_id, "applicant": app.user_id},
            )
        if app.approval_status not in RESUBMITTABLE:
            raise InvalidStateError(
                f"Only rejected applications can be resubmitted (current: {app.approval_status}).",
                {"approval_status": str(app.approval_status)},
            )

        # earlier approvals belong to the rejected round
        cleared = {
            "tl_approved_by": None, "tl_approved_at": None,
            "dh_approved_by": None, "dh_approved_at": None,
        }
        if not accessor.compare_and_set_status(app.seq, app.approval_status, ApprovalStatus.RESUBMITTED, **cleared):
            raise InvalidStateError(
                "Application changed while resubmitting.",
                {"application_type": str(app.application_type), "application_seq": app.seq},
            )
        alarms.notify_first_approvers(app, ApprovalStatus.RESUBMITTED, alarms.msg_submitted(app, resubmitted=True))

    logger.info("[approval] %s#%s resubmitted by applicant %s", app.application_type, app.seq, actor.user_id)
    return ApprovalStatus.RESUBMITTED


def announce_submission(application_type, application_seq: int) -> None:
    """Alarm the first approvers about a freshly stored application (called by the form layer)."""
    accessor = get_accessor(application_type)
    with transaction.atomic():
        app = accessor.get(application_seq)
        alarms.notify_first_approvers(app, ApprovalStatus.SUBMITTED, alarms.msg_submitted(app))
