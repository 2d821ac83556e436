from django.db import models
from .mixins import TimeStampedModel
from .choices import RoleLevel


class Employee(TimeStampedModel):
    """Directory row: who belongs to which division/team and with which role."""
    user_id = models.BigIntegerField(unique=True, db_index=True)
    name = models.CharField(max_length=100, blank=True, default="")
    email = models.CharField(max_length=254, blank=True, default="")
    division = models.CharField(max_length=50, blank=True, default="", db_index=True)
    team = models.CharField(max_length=50, blank=True, default="")
    auth_val = models.CharField(max_length=2, choices=RoleLevel.choices, default=RoleLevel.NONE)
    lark_open_id = models.CharField(max_length=64, blank=True, default="", help_text="Lark open_id, if any")

    class Meta:
        db_table = "tbl_users_bas"
        ordering = ["division", "team", "name"]
        indexes = [models.Index(fields=["division", "team", "auth_val"], name="users_div_team_role_idx")]

    def __str__(self):
        return f"{self.name or self.user_id} [{self.division}/{self.team}] {self.get_auth_val_display()}"
