# Every model lives in the approvals.models namespace
from .mixins import TimeStampedModel

from .choices import (
    ApplicationType, ApprovalStatus, ApprovalAction, RoleLevel, RejectionLevel, RedirectUrl,
)
from .employee import Employee
from .application import (
    ApprovalTrackedModel,
    VacationHistory, ExpenseClaim, RentalSupport, RentalProposal,
)
from .rejection import ApprovalRejection
from .alarm import UserAlarm

__all__ = [
    "TimeStampedModel",
    "ApplicationType", "ApprovalStatus", "ApprovalAction", "RoleLevel", "RejectionLevel", "RedirectUrl",
    "Employee",
    "ApprovalTrackedModel",
    "VacationHistory", "ExpenseClaim", "RentalSupport", "RentalProposal",
    "ApprovalRejection",
    "UserAlarm",
]
