# -*- coding: utf-8 -*-
"""
Actor resolution: turns the caller's user_id into the identity the engine trusts
(division, team, role). Authentication itself happens before this.
"""
from __future__ import annotations
from dataclasses import dataclass
import logging

from approvals.exceptions import NotFound
from approvals.models import RoleLevel
from approvals.repositories import employee_repository as repo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Actor:
    user_id: int
    division: str = ""
    team: str = ""
    role: RoleLevel = RoleLevel.NONE
    name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == RoleLevel.ADMIN


def resolve_actor(user_id: int) -> Actor:
    emp = repo.get(user_id)
    if emp is None:
        logger.warning("[actor] unknown user_id=%s", user_id)
        raise NotFound(f"User #{user_id} does not exist.", {"user_id": user_id})
    try:
        role = RoleLevel(emp.auth_val)
    except ValueError:
        logger.warning("[actor] unknown auth_val=%r for user_id=%s, treated as team member", emp.auth_val, user_id)
        role = RoleLevel.NONE
    return Actor(
        user_id=emp.user_id,
        division=emp.division,
        team=emp.team,
        role=role,
        name=emp.name,
    )
