# -*- coding: utf-8 -*-
"""
Outbound delivery of alarms (email / Lark webhook).
Best effort: callers run these after commit, failures are logged and reported as False.
"""
from __future__ import annotations
import logging
from typing import Iterable, Optional, Tuple, Dict, Any

import requests
from django.conf import settings
from django.core.mail import EmailMultiAlternatives

logger = logging.getLogger(__name__)

# -----------------------------
# Helpers
# -----------------------------
def _mask_webhook(url: Optional[str]) -> str:
    """Mask webhook so the full URL never lands in the logs."""
    if not url:
        return ""
    if len(url) <= 14:
        return "***"
    return f"{url[:10]}...{url[-4:]}"

def _mk_subject(subject: str) -> str:
    prefix = getattr(settings, "EMAIL_SUBJECT_PREFIX", "")
    return f"{prefix}{subject}" if prefix else subject


# -----------------------------
# Email
# -----------------------------
def send_email_notification(
    *,
    subject: str,
    text_body: str,
    to_emails: Iterable[str],
    html_body: Optional[str] = None,
) -> bool:
    tos = [e for e in (to_emails or []) if e]
    if not tos:
        logger.warning("[notify.email] No recipients; skip.")
        return False

    from_email = getattr(settings, "DEFAULT_FROM_EMAIL", None) or getattr(settings, "SERVER_EMAIL", None)
    if not from_email:
        logger.warning("[notify.email] DEFAULT_FROM_EMAIL / SERVER_EMAIL not set; skip.")
        return False

    try:
        msg = EmailMultiAlternatives(
            subject=_mk_subject(subject),
            body=text_body,
            from_email=from_email,
            to=tos,
        )
        if html_body:
            msg.attach_alternative(html_body, "text/html")
        msg.send(fail_silently=False)
    except Exception as ex:
        logger.warning("[notify.email] send failed to=%s: %s", tos, ex)
        return False
    return True


# -----------------------------
# Lark Webhook
# -----------------------------
def _post_lark(url: str, payload: Dict[str, Any], timeout: Optional[float] = None) -> Tuple[bool, str, str]:
    """POST JSON to the Lark webhook. Returns (ok, status_code_str, resp_text)."""
    timeout = timeout or getattr(settings, "LARK_TIMEOUT", 8)
    try:
        r = requests.post(url, json=payload, timeout=timeout)
    except requests.RequestException as ex:
        return False, "EXC", str(ex)
    return r.status_code < 300, str(r.status_code), (r.text or "")[:2000]


def send_lark_notification(
    *,
    text: str,
    at_user_ids: Optional[Iterable[str]] = None,
    webhook_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> bool:
    """Send text to Lark/Feishu through the webhook (v2); open_ids in at_user_ids get @mentioned."""
    url = webhook_url or getattr(settings, "LARK_APPROVAL_WEBHOOK_URL", None)
    if not url:
        logger.warning("[notify.lark] LARK_APPROVAL_WEBHOOK_URL not set; skip.")
        return False

    at_markup = ""
    if at_user_ids:
        at_markup = " " + " ".join(f'<at user_id="{uid}"></at>' for uid in at_user_ids if uid)

    payload = {
        "msg_type": "text",
        "content": {"text": f"{text}{at_markup}".strip()},
    }

    ok, code, resp_text = _post_lark(url, payload, timeout=timeout)
    if not ok:
        logger.warning("[notify.lark] webhook=%s status=%s resp=%s", _mask_webhook(url), code, resp_text[:500])
    return ok
