import pytest
from datetime import date, timedelta
from django.utils import timezone
from approvals.models import (
    ApplicationType, ApprovalStatus, RoleLevel, Employee,
    VacationHistory, ExpenseClaim, RentalSupport, RentalProposal,
)
from approvals.selectors.actor_selector import resolve_actor

# DEV/T1: applicant 100, leader 200 | DEV/T2: member 110, leader 210 | DEV: head 300
# OPS/T1: member 120, leader 220 | OPS: head 310 | admin 900 sits outside both divisions
DIRECTORY = [
    (100, "Kim Applicant", "DEV", "T1", RoleLevel.NONE),
    (200, "Lee Leader", "DEV", "T1", RoleLevel.TEAM_LEADER),
    (110, "Park Member", "DEV", "T2", RoleLevel.NONE),
    (210, "Choi Leader", "DEV", "T2", RoleLevel.TEAM_LEADER),
    (300, "Jung Head", "DEV", "HQ", RoleLevel.DIVISION_HEAD),
    (120, "Han Ops", "OPS", "T1", RoleLevel.NONE),
    (220, "Yoon OpsLeader", "OPS", "T1", RoleLevel.TEAM_LEADER),
    (310, "Kang OpsHead", "OPS", "HQ", RoleLevel.DIVISION_HEAD),
    (900, "Master Admin", "MGMT", "", RoleLevel.ADMIN),
]


@pytest.fixture
def directory(db):
    return {
        uid: Employee.objects.create(
            user_id=uid, name=name, division=div, team=team, auth_val=role,
            email=f"user{uid}@example.com", lark_open_id=f"ou_{uid}",
        )
        for uid, name, div, team, role in DIRECTORY
    }


@pytest.fixture
def actor(directory):
    """actor(200) -> Actor resolved from the directory."""
    return resolve_actor


def _payload(application_type):
    today = date.today()
    if application_type == ApplicationType.VACATION:
        return {"start_date": today, "end_date": today + timedelta(days=1), "period": "2.0", "vacation_type": "annual", "reason": "family trip"}
    if application_type == ApplicationType.EXPENSE:
        return {"request_date": today, "billing_yy_month": 202510, "child_cnt": 2, "total_amount": 150000}
    if application_type == ApplicationType.RENTAL_SUPPORT:
        return {
            "request_date": today, "billing_yy_month": 202510, "contract_start_date": today,
            "contract_end_date": today + timedelta(days=365), "contract_monthly_rent": 800000, "billing_amount": 400000,
        }
    return {
        "previous_address": "Seoul Mapo-gu 1", "rental_address": "Seoul Gangnam-gu 2",
        "contract_start_date": today, "contract_monthly_rent": 900000, "billing_reason": "relocation",
    }


_MODELS = {
    ApplicationType.VACATION: VacationHistory,
    ApplicationType.EXPENSE: ExpenseClaim,
    ApplicationType.RENTAL_SUPPORT: RentalSupport,
    ApplicationType.RENTAL_PROPOSAL: RentalProposal,
}


@pytest.fixture
def make_application(directory):
    def _make(application_type=ApplicationType.VACATION, user_id=100, status=ApprovalStatus.SUBMITTED, created_at=None):
        model = _MODELS[ApplicationType(application_type)]
        obj = model.objects.create(user_id=user_id, approval_status=status, **_payload(application_type))
        if created_at is not None:
            # auto_now_add ignores the value passed to create()
            model.objects.filter(pk=obj.pk).update(created_at=created_at)
            obj.refresh_from_db()
        return obj
    return _make


@pytest.fixture
def minutes_ago():
    now = timezone.now()
    return lambda n: now - timedelta(minutes=n)
