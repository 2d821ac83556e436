import pytest
import requests
from datetime import timedelta
from django.utils import timezone
from approvals.exceptions import NotFound
from approvals.models import ApplicationType, UserAlarm
from approvals.services import alarm_service as svc
from approvals.utils import notify


def _alarm(user_id=100, **kw):
    params = dict(
        user_id=user_id, alarm_type="B", application_type=ApplicationType.VACATION,
        application_seq=1, message="approved", redirect_url="/my-applications",
    )
    params.update(kw)
    return svc.notify(**params)


def _age(alarm, days, is_read):
    UserAlarm.objects.filter(pk=alarm.pk).update(
        created_at=timezone.now() - timedelta(days=days), is_read=is_read,
    )


@pytest.mark.django_db
def test_notify_creates_unread_alarm(directory):
    alarm = _alarm(message="x" * 800)
    assert alarm.is_read is False
    assert len(alarm.message) == 500
    assert [a.pk for a in svc.list_unread(100)] == [alarm.pk]


@pytest.mark.django_db
def test_mark_read(directory):
    alarm = _alarm()

    assert svc.mark_read(alarm.pk).is_read is True
    # second call is a no-op
    assert svc.mark_read(alarm.pk).is_read is True
    assert list(svc.list_unread(100)) == []

    with pytest.raises(NotFound):
        svc.mark_read(999999)


@pytest.mark.django_db
def test_mark_all_read_only_touches_one_user(directory):
    _alarm(100)
    _alarm(100)
    _alarm(200)

    assert svc.mark_all_read(100) == 2
    assert svc.mark_all_read(100) == 0
    assert svc.list_unread(200).count() == 1


@pytest.mark.django_db
def test_list_all_hides_old_read_alarms(directory, settings):
    settings.APPROVAL_ALARM_READ_RETENTION_DAYS = 3
    old_read = _alarm()
    old_unread = _alarm()
    recent_read = _alarm()
    fresh = _alarm()
    _age(old_read, 5, True)
    _age(old_unread, 5, False)
    _age(recent_read, 1, True)

    visible = [a.pk for a in svc.list_all(100)]

    assert visible == [fresh.pk, recent_read.pk, old_unread.pk]
    # hidden, not deleted
    assert UserAlarm.objects.filter(pk=old_read.pk).exists()


@pytest.mark.django_db
def test_external_delivery_runs_after_commit(directory, settings, monkeypatch, django_capture_on_commit_callbacks):
    settings.APPROVAL_NOTIFY_EMAIL = True
    settings.APPROVAL_NOTIFY_LARK = True
    sent = {}
    monkeypatch.setattr(svc, "send_email_notification", lambda **kw: sent.setdefault("email", kw) and True)
    monkeypatch.setattr(svc, "send_lark_notification", lambda **kw: sent.setdefault("lark", kw) and True)

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        _alarm(message="approved by leader")
        assert sent == {}

    assert len(callbacks) == 1
    assert sent["email"]["to_emails"] == ["user100@example.com"]
    assert sent["lark"]["at_user_ids"] == ["ou_100"]
    assert sent["lark"]["text"] == "approved by leader"


@pytest.mark.django_db
def test_delivery_disabled_schedules_nothing(directory, settings, django_capture_on_commit_callbacks):
    settings.APPROVAL_NOTIFY_EMAIL = False
    settings.APPROVAL_NOTIFY_LARK = False
    with django_capture_on_commit_callbacks() as callbacks:
        _alarm()
    assert callbacks == []


@pytest.mark.django_db
def test_delivery_failure_keeps_alarm(directory, settings, monkeypatch, django_capture_on_commit_callbacks):
    settings.APPROVAL_NOTIFY_EMAIL = True

    def broken(**kw):
        raise ConnectionError("smtp down")

    monkeypatch.setattr(svc, "send_email_notification", broken)
    with django_capture_on_commit_callbacks(execute=True):
        alarm = _alarm()
    assert UserAlarm.objects.filter(pk=alarm.pk).exists()


def test_lark_without_webhook_is_skipped(settings):
    settings.LARK_APPROVAL_WEBHOOK_URL = ""
    assert notify.send_lark_notification(text="hello") is False


def test_lark_posts_text_with_mentions(settings, monkeypatch):
    calls = []

    class Resp:
        status_code = 200
        text = "{}"

    def fake_post(url, json=None, timeout=None):
        calls.append((url, json, timeout))
        return Resp()

    monkeypatch.setattr(notify.requests, "post", fake_post)
    ok = notify.send_lark_notification(
        text="pending", at_user_ids=["ou_1"], webhook_url="https://open.larksuite.com/hook/abc", timeout=2,
    )

    assert ok is True
    url, payload, timeout = calls[0]
    assert payload["msg_type"] == "text"
    assert payload["content"]["text"] == 'pending <at user_id="ou_1"></at>'
    assert timeout == 2


def test_lark_network_error_returns_false(monkeypatch):
    def fail(*args, **kwargs):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(notify.requests, "post", fail)
    assert notify.send_lark_notification(text="x", webhook_url="https://example.invalid/hook") is False


def test_email_without_recipients_is_skipped():
    assert notify.send_email_notification(subject="s", text_body="b", to_emails=[]) is False


def test_email_is_sent(settings, mailoutbox):
    settings.DEFAULT_FROM_EMAIL = "hr@example.com"
    settings.EMAIL_SUBJECT_PREFIX = "[HR] "

    assert notify.send_email_notification(subject="Approved", text_body="body", to_emails=["a@example.com"]) is True
    [mail] = mailoutbox
    assert mail.subject == "[HR] Approved"
    assert mail.to == ["a@example.com"]
