# approvals/repositories/employee_repository.py
from typing import Optional, Iterable, Dict, List
from django.db.models import QuerySet
from approvals.models import Employee, RoleLevel


def get(user_id: int) -> Optional[Employee]:
    return Employee.objects.filter(user_id=user_id).first()

def list_by_role(role: str, *, division: str, team: Optional[str] = None) -> QuerySet[Employee]:
    qs = Employee.objects.filter(auth_val=role, division=division)
    if team is not None:
        qs = qs.filter(team=team)
    return qs.order_by("user_id")

def team_leaders(division: str, team: str) -> QuerySet[Employee]:
    return list_by_role(RoleLevel.TEAM_LEADER, division=division, team=team)

def division_heads(division: str) -> QuerySet[Employee]:
    return list_by_role(RoleLevel.DIVISION_HEAD, division=division)

def user_ids_in_scope(division: str, team: Optional[str] = None) -> QuerySet:
    """user_id values of everyone in a division (optionally one team); usable as a subquery."""
    qs = Employee.objects.filter(division=division)
    if team is not None:
        qs = qs.filter(team=team)
    return qs.values("user_id")

def names_map(user_ids: Iterable[int]) -> Dict[int, str]:
    ids: List[int] = list({int(u) for u in user_ids if u is not None})
    if not ids:
        return {}
    return dict(Employee.objects.filter(user_id__in=ids).values_list("user_id", "name"))
