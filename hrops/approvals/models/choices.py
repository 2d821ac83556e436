# -*- coding: utf-8 -*-
"""
Enums shared by every application table, the rejection ledger and the alarm table.
Values are what gets stored in the DB (legacy codes kept as-is).
"""
from django.db import models


class ApplicationType(models.TextChoices):
    VACATION = "VACATION", "Vacation"
    EXPENSE = "EXPENSE", "Personal expense"
    RENTAL_SUPPORT = "RENTAL_SUPPORT", "Rental support"
    RENTAL_PROPOSAL = "RENTAL_PROPOSAL", "Rental proposal"

    @property
    def list_key(self) -> str:
        # key of the per-type list in the pending-approval view
        return _LIST_KEYS[self.value]

    @classmethod
    def parse(cls, raw) -> "ApplicationType":
        """Accept the enum value (``VACATION``) or the list key (``vacation``)."""
        text = str(raw or "").strip()
        if text.upper() in cls.values:
            return cls(text.upper())
        for value, key in _LIST_KEYS.items():
            if key == text.lower():
                return cls(value)
        raise ValueError(f"Unknown application type: {raw!r}")


_LIST_KEYS = {
    "VACATION": "vacation",
    "EXPENSE": "expense",
    "RENTAL_SUPPORT": "rental",
    "RENTAL_PROPOSAL": "rental_proposal",
}


class ApprovalStatus(models.TextChoices):
    SUBMITTED = "A", "Submitted"
    RESUBMITTED = "AM", "Resubmitted after edit"
    TEAM_LEADER_APPROVED = "B", "Approved by team leader"
    TEAM_LEADER_REJECTED = "RB", "Rejected by team leader"
    DIVISION_HEAD_APPROVED = "C", "Approved by division head"
    DIVISION_HEAD_REJECTED = "RC", "Rejected by division head"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    @classmethod
    def from_stored(cls, raw) -> "ApprovalStatus":
        # NULL in legacy rows means "just submitted"
        if raw in (None, ""):
            return cls.SUBMITTED
        return cls(raw)


TERMINAL_STATUSES = frozenset({
    ApprovalStatus.TEAM_LEADER_REJECTED,
    ApprovalStatus.DIVISION_HEAD_APPROVED,
    ApprovalStatus.DIVISION_HEAD_REJECTED,
})


class RoleLevel(models.TextChoices):
    NONE = "tw", "Team member"
    TEAM_LEADER = "tj", "Team leader"
    DIVISION_HEAD = "bb", "Division head"
    ADMIN = "ma", "Administrator"


class RejectionLevel(models.TextChoices):
    TEAM_LEADER = "TEAM_LEADER", "Team leader"
    DIVISION_HEAD = "DIVISION_HEAD", "Division head"


class RedirectUrl(models.TextChoices):
    MY_APPLICATIONS = "/my-applications", "My applications"
    APPROVAL_LIST = "/approval-list", "Approval list"


class ApprovalAction(models.TextChoices):
    APPROVE = "APPROVE", "Approve"
    REJECT = "REJECT", "Reject"
