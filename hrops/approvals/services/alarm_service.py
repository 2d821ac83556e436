# -*- coding: utf-8 -*-
"""
Alarm dispatcher:
- in-app alarm rows (UserAlarm) are written inside the caller's transaction
- optional email / Lark delivery is queued with transaction.on_commit, so nothing
  goes out for a transition that rolled back
"""
from __future__ import annotations
from typing import List, Optional
import logging

from django.conf import settings
from django.db import transaction

from approvals.exceptions import NotFound
from approvals.models import ApprovalStatus, RedirectUrl, UserAlarm
from approvals.repositories import alarm_repository as repo
from approvals.repositories import employee_repository
from approvals.repositories.application_repository import ApplicationSnapshot
from approvals.selectors import alarm_selector
from approvals.utils.notify import send_email_notification, send_lark_notification

log = logging.getLogger(__name__)


# ====== Delivery (after commit) ======
def _deliver(alarm_id: int) -> None:
    alarm = repo.get_or_none(alarm_id)
    if alarm is None:
        return
    emp = employee_repository.get(alarm.user_id)
    if emp is None:
        log.warning("[alarm] no directory row for user_id=%s; external delivery skipped", alarm.user_id)
        return

    if getattr(settings, "APPROVAL_NOTIFY_EMAIL", False) and emp.email:
        try:
            send_email_notification(
                subject=f"[Approval] {alarm.get_application_type_display()} #{alarm.application_seq}",
                text_body=f"{alarm.message}\n\n{alarm.redirect_url}",
                to_emails=[emp.email],
            )
        except Exception as ex:
            log.exception("[alarm] email delivery failed alarm=%s: %s", alarm_id, ex)

    if getattr(settings, "APPROVAL_NOTIFY_LARK", False):
        try:
            send_lark_notification(
                text=alarm.message,
                at_user_ids=[emp.lark_open_id] if emp.lark_open_id else None,
            )
        except Exception as ex:
            log.exception("[alarm] lark delivery failed alarm=%s: %s", alarm_id, ex)


def _schedule_delivery(alarm: UserAlarm) -> None:
    if not (getattr(settings, "APPROVAL_NOTIFY_EMAIL", False) or getattr(settings, "APPROVAL_NOTIFY_LARK", False)):
        return
    alarm_id = alarm.pk
    transaction.on_commit(lambda: _deliver(alarm_id))


# ====== Dispatcher API ======
def notify(
    *,
    user_id: int,
    alarm_type: str,
    application_type: str,
    application_seq: int,
    message: str = "",
    redirect_url: str = "",
) -> UserAlarm:
    alarm = repo.create_alarm(
        user_id=user_id,
        alarm_type=alarm_type,
        application_type=application_type,
        application_seq=application_seq,
        message=message,
        redirect_url=redirect_url,
    )
    log.info(
        "[alarm] created seq=%s to_user=%s type=%s key=%s#%s",
        alarm.pk, user_id, alarm_type, application_type, application_seq,
    )
    _schedule_delivery(alarm)
    return alarm

def list_unread(user_id: int):
    return alarm_selector.unread_alarms(user_id)

def list_all(user_id: int):
    return alarm_selector.all_alarms(user_id)

def mark_read(alarm_seq: int) -> UserAlarm:
    alarm = repo.get_or_none(alarm_seq)
    if alarm is None:
        raise NotFound(f"Alarm #{alarm_seq} does not exist.", {"alarm_seq": alarm_seq})
    if not alarm.is_read:
        repo.mark_read(alarm_seq)
        alarm.is_read = True
    return alarm

def mark_all_read(user_id: int) -> int:
    n = repo.mark_all_read(user_id)
    log.info("[alarm] mark_all_read user_id=%s updated=%s", user_id, n)
    return n


# ====== Fan-out used by the approval engine ======
def _applicant_name(app: ApplicationSnapshot) -> str:
    emp = employee_repository.get(app.user_id)
    return (emp.name if emp and emp.name else f"User#{app.user_id}")

def _type_label(app: ApplicationSnapshot) -> str:
    return app.application_type.label

def notify_applicant(app: ApplicationSnapshot, alarm_type: ApprovalStatus, message: str) -> UserAlarm:
    return notify(
        user_id=app.user_id,
        alarm_type=alarm_type,
        application_type=app.application_type,
        application_seq=app.seq,
        message=message,
        redirect_url=RedirectUrl.MY_APPLICATIONS,
    )

def notify_division_heads(app: ApplicationSnapshot, alarm_type: ApprovalStatus, message: str) -> List[UserAlarm]:
    return [
        notify(
            user_id=head.user_id,
            alarm_type=alarm_type,
            application_type=app.application_type,
            application_seq=app.seq,
            message=message,
            redirect_url=RedirectUrl.APPROVAL_LIST,
        )
        for head in employee_repository.division_heads(app.division)
    ]

def notify_first_approvers(app: ApplicationSnapshot, alarm_type: ApprovalStatus, message: str) -> List[UserAlarm]:
    """Team leaders of the applicant's team; division heads when the team has no leader."""
    leaders = list(employee_repository.team_leaders(app.division, app.team))
    if not leaders:
        log.info("[alarm] no team leader for %s/%s, notifying division heads", app.division, app.team)
        return notify_division_heads(app, alarm_type, message)
    return [
        notify(
            user_id=leader.user_id,
            alarm_type=alarm_type,
            application_type=app.application_type,
            application_seq=app.seq,
            message=message,
            redirect_url=RedirectUrl.APPROVAL_LIST,
        )
        for leader in leaders
    ]


# ====== Messages ======
def msg_submitted(app: ApplicationSnapshot, *, resubmitted: bool = False) -> str:
    verb = "resubmitted" if resubmitted else "submitted"
    return f"{_applicant_name(app)} {verb} a {_type_label(app)} application."

def msg_team_leader_approved(app: ApplicationSnapshot) -> str:
    return f"Your {_type_label(app)} application was approved by the team leader."

def msg_pending_division_head(app: ApplicationSnapshot) -> str:
    return (
        f"{_applicant_name(app)}'s {_type_label(app)} application was approved by the team leader "
        f"and is waiting for your decision."
    )

def msg_final_approved(app: ApplicationSnapshot) -> str:
    return f"Your {_type_label(app)} application received final approval."

def msg_rejected(app: ApplicationSnapshot, reason: Optional[str]) -> str:
    return f"Your {_type_label(app)} application was rejected. Reason: {reason or '-'}"
