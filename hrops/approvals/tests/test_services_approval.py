import dataclasses
import pytest
from approvals.exceptions import ForbiddenError, InvalidStateError, NotFound, ValidationError
from approvals.models import (
    ApplicationType, ApprovalStatus, ApprovalRejection, RedirectUrl, RejectionLevel,
    UserAlarm, VacationHistory, ExpenseClaim, RentalProposal,
)
from approvals.repositories import alarm_repository
from approvals.repositories.application_repository import get_accessor
from approvals.selectors.rejection_selector import latest_rejection, rejection_history
from approvals.services import approval_service as svc

VAC = ApplicationType.VACATION


def _alarms(user_id):
    return list(UserAlarm.objects.filter(user_id=user_id).order_by("id"))


@pytest.mark.django_db
def test_full_approval_chain(actor, make_application):
    app = make_application(VAC)

    assert svc.transition(VAC, app.pk, actor(200), "APPROVE") == ApprovalStatus.TEAM_LEADER_APPROVED
    app.refresh_from_db()
    assert app.approval_status == "B"
    assert app.tl_approved_by == 200 and app.tl_approved_at is not None

    # applicant informed, division head asked to decide
    applicant_alarms = _alarms(100)
    assert [a.alarm_type for a in applicant_alarms] == ["B"]
    assert applicant_alarms[0].redirect_url == RedirectUrl.MY_APPLICATIONS
    head_alarms = _alarms(300)
    assert [a.alarm_type for a in head_alarms] == ["A"]
    assert head_alarms[0].redirect_url == RedirectUrl.APPROVAL_LIST
    assert _alarms(310) == []

    assert svc.transition(VAC, app.pk, actor(300), "approve") == ApprovalStatus.DIVISION_HEAD_APPROVED
    app.refresh_from_db()
    assert app.approval_status == "C"
    assert app.dh_approved_by == 300
    assert [a.alarm_type for a in _alarms(100)] == ["B", "C"]

    with pytest.raises(InvalidStateError):
        svc.transition(VAC, app.pk, actor(300), "APPROVE")
    with pytest.raises(InvalidStateError):
        svc.transition(VAC, app.pk, actor(900), "REJECT", reason="too late")
    assert ApprovalRejection.objects.count() == 0


@pytest.mark.django_db
def test_team_leader_reject_writes_ledger_and_alarm(actor, make_application):
    app = make_application(ApplicationType.EXPENSE)

    new_status = svc.transition(ApplicationType.EXPENSE, app.pk, actor(200), "REJECT", reason="  receipt missing ")
    assert new_status == ApprovalStatus.TEAM_LEADER_REJECTED
    assert ExpenseClaim.objects.get(pk=app.pk).approval_status == "RB"

    rej = latest_rejection(ApplicationType.EXPENSE, app.pk)
    assert rej.rejected_by == 200
    assert rej.rejection_level == RejectionLevel.TEAM_LEADER
    assert rej.rejection_reason == "receipt missing"

    [alarm] = _alarms(100)
    assert alarm.alarm_type == "RB"
    assert "receipt missing" in alarm.message
    # the division head is not involved in a team-leader rejection
    assert _alarms(300) == []


@pytest.mark.django_db
def test_division_head_reject(actor, make_application):
    app = make_application(VAC, status=ApprovalStatus.TEAM_LEADER_APPROVED)

    assert svc.transition(VAC, app.pk, actor(300), "REJECT", reason="budget") == ApprovalStatus.DIVISION_HEAD_REJECTED
    rej = latest_rejection(VAC, app.pk)
    assert rej.rejection_level == RejectionLevel.DIVISION_HEAD
    assert [a.alarm_type for a in _alarms(100)] == ["RC"]


@pytest.mark.django_db
@pytest.mark.parametrize("reason", [None, "", "   "])
def test_reject_requires_reason(actor, make_application, reason):
    app = make_application(VAC)

    with pytest.raises(ValidationError):
        svc.transition(VAC, app.pk, actor(200), "REJECT", reason=reason)

    app.refresh_from_db()
    assert app.approval_status == "A"
    assert ApprovalRejection.objects.count() == 0
    assert UserAlarm.objects.count() == 0


@pytest.mark.django_db
def test_unknown_action(actor, make_application):
    app = make_application(VAC)
    with pytest.raises(ValidationError):
        svc.transition(VAC, app.pk, actor(200), "ESCALATE")


@pytest.mark.django_db
@pytest.mark.parametrize("approver", [
    110,  # team member
    210,  # leader of another team
    220,  # leader of a team with the same name in another division
    300,  # division head cannot act at the team-leader level
])
def test_team_level_forbidden(actor, make_application, approver):
    app = make_application(VAC)

    with pytest.raises(ForbiddenError):
        svc.transition(VAC, app.pk, actor(approver), "APPROVE")
    app.refresh_from_db()
    assert app.approval_status == "A"
    assert UserAlarm.objects.count() == 0


@pytest.mark.django_db
@pytest.mark.parametrize("approver", [200, 310])
def test_division_level_forbidden(actor, make_application, approver):
    app = make_application(VAC, status=ApprovalStatus.TEAM_LEADER_APPROVED)

    with pytest.raises(ForbiddenError):
        svc.transition(VAC, app.pk, actor(approver), "REJECT", reason="no")
    assert ApprovalRejection.objects.count() == 0


@pytest.mark.django_db
def test_admin_decides_at_both_levels(actor, make_application):
    app = make_application(ApplicationType.RENTAL_PROPOSAL)

    svc.transition(ApplicationType.RENTAL_PROPOSAL, app.pk, actor(900), "APPROVE")
    svc.transition(ApplicationType.RENTAL_PROPOSAL, app.pk, actor(900), "APPROVE")

    app = RentalProposal.objects.get(pk=app.pk)
    assert app.approval_status == "C"
    assert app.tl_approved_by == 900 and app.dh_approved_by == 900


@pytest.mark.django_db
def test_null_status_is_treated_as_submitted(actor, make_application):
    app = make_application(VAC, status=None)

    assert svc.transition(VAC, app.pk, actor(200), "APPROVE") == ApprovalStatus.TEAM_LEADER_APPROVED


@pytest.mark.django_db
def test_resubmitted_is_decided_like_submitted(actor, make_application):
    app = make_application(VAC, status=ApprovalStatus.RESUBMITTED)

    assert svc.transition(VAC, app.pk, actor(200), "APPROVE") == ApprovalStatus.TEAM_LEADER_APPROVED


@pytest.mark.django_db
def test_unknown_keys(actor, make_application):
    with pytest.raises(NotFound):
        svc.transition(VAC, 987654, actor(200), "APPROVE")
    with pytest.raises(NotFound):
        svc.transition("PAYROLL", 1, actor(200), "APPROVE")


@pytest.mark.django_db
def test_concurrent_loser_gets_invalid_state(actor, make_application, monkeypatch):
    app = make_application(VAC)
    accessor = get_accessor(VAC)
    stale = accessor.get(app.pk)

    # first decision wins
    svc.transition(VAC, app.pk, actor(200), "APPROVE")
    alarms_before = UserAlarm.objects.count()

    # second decision was made against the row as it was before the first commit
    monkeypatch.setattr(accessor, "lock", lambda seq: dataclasses.replace(stale))
    with pytest.raises(InvalidStateError):
        svc.transition(VAC, app.pk, actor(200), "REJECT", reason="conflicting")

    assert VacationHistory.objects.get(pk=app.pk).approval_status == "B"
    assert ApprovalRejection.objects.count() == 0
    assert UserAlarm.objects.count() == alarms_before


@pytest.mark.django_db
def test_failed_alarm_rolls_back_transition(actor, make_application, monkeypatch):
    app = make_application(VAC)

    def boom(**kwargs):
        raise RuntimeError("alarm table unavailable")

    monkeypatch.setattr(alarm_repository, "create_alarm", boom)
    with pytest.raises(RuntimeError):
        svc.transition(VAC, app.pk, actor(200), "REJECT", reason="overlap")

    app.refresh_from_db()
    assert app.approval_status == "A"
    assert ApprovalRejection.objects.count() == 0


@pytest.mark.django_db
def test_resubmit_after_division_head_reject(actor, make_application):
    app = make_application(VAC)
    svc.transition(VAC, app.pk, actor(200), "APPROVE")
    svc.transition(VAC, app.pk, actor(300), "REJECT", reason="dates clash")
    UserAlarm.objects.all().delete()

    assert svc.resubmit(VAC, app.pk, actor(100)) == ApprovalStatus.RESUBMITTED

    app.refresh_from_db()
    assert app.approval_status == "AM"
    assert app.tl_approved_by is None and app.tl_approved_at is None
    assert app.dh_approved_by is None
    # ledger is kept
    assert rejection_history(VAC, app.pk).count() == 1
    [alarm] = _alarms(200)
    assert alarm.alarm_type == "AM"
    assert alarm.redirect_url == RedirectUrl.APPROVAL_LIST

    # back in front of the team leader
    assert svc.transition(VAC, app.pk, actor(200), "APPROVE") == ApprovalStatus.TEAM_LEADER_APPROVED


@pytest.mark.django_db
def test_rejection_history_newest_first(actor, make_application):
    app = make_application(VAC)
    svc.transition(VAC, app.pk, actor(200), "REJECT", reason="first")
    svc.resubmit(VAC, app.pk, actor(100))
    svc.transition(VAC, app.pk, actor(200), "REJECT", reason="second")

    assert [r.rejection_reason for r in rejection_history(VAC, app.pk)] == ["second", "first"]
    assert latest_rejection(VAC, app.pk).rejection_reason == "second"


@pytest.mark.django_db
def test_resubmit_rules(actor, make_application):
    pending = make_application(VAC)
    rejected = make_application(VAC, status=ApprovalStatus.TEAM_LEADER_REJECTED)

    with pytest.raises(InvalidStateError):
        svc.resubmit(VAC, pending.pk, actor(100))
    with pytest.raises(ForbiddenError):
        svc.resubmit(VAC, rejected.pk, actor(200))
    rejected.refresh_from_db()
    assert rejected.approval_status == "RB"


@pytest.mark.django_db
def test_resubmit_without_team_leader_alarms_division_heads(actor, directory, make_application):
    directory[210].delete()
    app = make_application(VAC, user_id=110, status=ApprovalStatus.TEAM_LEADER_REJECTED)

    svc.resubmit(VAC, app.pk, actor(110))
    assert [a.alarm_type for a in _alarms(300)] == ["AM"]


@pytest.mark.django_db
def test_announce_submission(directory, make_application):
    app = make_application(ApplicationType.RENTAL_SUPPORT)

    svc.announce_submission(ApplicationType.RENTAL_SUPPORT, app.pk)
    [alarm] = _alarms(200)
    assert alarm.alarm_type == "A"
    assert alarm.application_type == "RENTAL_SUPPORT"
    assert alarm.application_seq == app.pk
    assert "Kim Applicant" in alarm.message


@pytest.mark.django_db
def test_unknown_stored_status_is_invalid_state(actor, make_application):
    app = make_application(VAC)
    # legacy "done" code outside the known statuses
    VacationHistory.objects.filter(pk=app.pk).update(approval_status="D")

    with pytest.raises(InvalidStateError):
        svc.transition(VAC, app.pk, actor(200), "APPROVE")
    with pytest.raises(InvalidStateError):
        svc.resubmit(VAC, app.pk, actor(100))

    assert VacationHistory.objects.get(pk=app.pk).approval_status == "D"
    assert UserAlarm.objects.count() == 0


@pytest.mark.django_db
def test_unknown_key_is_reported_before_blank_reason(actor, make_application):
    with pytest.raises(NotFound):
        svc.transition(VAC, 987654, actor(200), "REJECT", reason="  ")


@pytest.mark.django_db
def test_rejection_reads_require_existing_application(actor, make_application):
    app = make_application(VAC)

    assert latest_rejection(VAC, app.pk) is None
    assert list(rejection_history(VAC, app.pk)) == []
    with pytest.raises(NotFound):
        rejection_history(VAC, 987654)
    with pytest.raises(NotFound):
        latest_rejection(VAC, 987654)
