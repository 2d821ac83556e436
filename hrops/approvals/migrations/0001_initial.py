# Generated manually for the initial approvals schema.
from __future__ import annotations

from django.db import migrations, models


APPROVAL_STATUS_CHOICES = [
    ("A", "Submitted"),
    ("AM", "Resubmitted after edit"),
    ("B", "Approved by team leader"),
    ("RB", "Rejected by team leader"),
    ("C", "Approved by division head"),
    ("RC", "Rejected by division head"),
]

APPLICATION_TYPE_CHOICES = [
    ("VACATION", "Vacation"),
    ("EXPENSE", "Personal expense"),
    ("RENTAL_SUPPORT", "Rental support"),
    ("RENTAL_PROPOSAL", "Rental proposal"),
]


def _id():
    return ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID"))


def _tracked_fields():
    return [
        _id(),
        ("user_id", models.BigIntegerField(db_index=True)),
        (
            "approval_status",
            models.CharField(
                blank=True, choices=APPROVAL_STATUS_CHOICES, db_index=True,
                default="A", max_length=2, null=True,
            ),
        ),
        ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
        ("tl_approved_by", models.BigIntegerField(blank=True, null=True)),
        ("tl_approved_at", models.DateTimeField(blank=True, null=True)),
        ("dh_approved_by", models.BigIntegerField(blank=True, null=True)),
        ("dh_approved_at", models.DateTimeField(blank=True, null=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Employee",
            fields=[
                _id(),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user_id", models.BigIntegerField(db_index=True, unique=True)),
                ("name", models.CharField(blank=True, default="", max_length=100)),
                ("email", models.CharField(blank=True, default="", max_length=254)),
                ("division", models.CharField(blank=True, db_index=True, default="", max_length=50)),
                ("team", models.CharField(blank=True, default="", max_length=50)),
                (
                    "auth_val",
                    models.CharField(
                        choices=[
                            ("tw", "Team member"),
                            ("tj", "Team leader"),
                            ("bb", "Division head"),
                            ("ma", "Administrator"),
                        ],
                        default="tw",
                        max_length=2,
                    ),
                ),
                ("lark_open_id", models.CharField(blank=True, default="", help_text="Lark open_id, if any", max_length=64)),
            ],
            options={
                "db_table": "tbl_users_bas",
                "ordering": ["division", "team", "name"],
                "indexes": [models.Index(fields=["division", "team", "auth_val"], name="users_div_team_role_idx")],
            },
        ),
        migrations.CreateModel(
            name="VacationHistory",
            fields=_tracked_fields() + [
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("period", models.DecimalField(blank=True, decimal_places=1, max_digits=5, null=True)),
                ("vacation_type", models.CharField(blank=True, default="", max_length=20)),
                ("reason", models.TextField(blank=True, default="")),
                ("used_vacation_days", models.DecimalField(blank=True, decimal_places=1, max_digits=5, null=True)),
            ],
            options={
                "db_table": "tbl_vacation_history",
                "ordering": ["-created_at", "-id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="ExpenseClaim",
            fields=_tracked_fields() + [
                ("request_date", models.DateField(blank=True, null=True)),
                ("billing_yy_month", models.IntegerField(blank=True, help_text="YYYYMM", null=True)),
                ("child_cnt", models.IntegerField(blank=True, null=True)),
                ("total_amount", models.BigIntegerField(blank=True, null=True)),
            ],
            options={
                "db_table": "tbl_expense_claim",
                "ordering": ["-created_at", "-id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="RentalSupport",
            fields=_tracked_fields() + [
                ("request_date", models.DateField(blank=True, null=True)),
                ("billing_yy_month", models.IntegerField(blank=True, help_text="YYYYMM", null=True)),
                ("contract_start_date", models.DateField(blank=True, null=True)),
                ("contract_end_date", models.DateField(blank=True, null=True)),
                ("contract_monthly_rent", models.BigIntegerField(blank=True, null=True)),
                ("billing_amount", models.BigIntegerField(blank=True, null=True)),
                ("payment_date", models.DateField(blank=True, null=True)),
            ],
            options={
                "db_table": "tbl_rental_support",
                "ordering": ["-created_at", "-id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="RentalProposal",
            fields=_tracked_fields() + [
                ("previous_address", models.CharField(blank=True, default="", max_length=300)),
                ("rental_address", models.CharField(blank=True, default="", max_length=300)),
                ("contract_start_date", models.DateField(blank=True, null=True)),
                ("contract_end_date", models.DateField(blank=True, null=True)),
                ("contract_monthly_rent", models.BigIntegerField(blank=True, null=True)),
                ("billing_amount", models.BigIntegerField(blank=True, null=True)),
                ("billing_start_date", models.DateField(blank=True, null=True)),
                ("billing_reason", models.TextField(blank=True, default="")),
            ],
            options={
                "db_table": "tbl_rental_approval",
                "ordering": ["-created_at", "-id"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="ApprovalRejection",
            fields=[
                _id(),
                ("application_type", models.CharField(choices=APPLICATION_TYPE_CHOICES, max_length=20)),
                ("application_seq", models.BigIntegerField()),
                ("rejected_by", models.BigIntegerField()),
                (
                    "rejection_level",
                    models.CharField(
                        choices=[("TEAM_LEADER", "Team leader"), ("DIVISION_HEAD", "Division head")],
                        max_length=20,
                    ),
                ),
                ("rejection_reason", models.CharField(max_length=1000)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "tbl_approval_rejection",
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["application_type", "application_seq"], name="rejection_app_key_idx")],
            },
        ),
        migrations.CreateModel(
            name="UserAlarm",
            fields=[
                _id(),
                ("user_id", models.BigIntegerField(db_index=True)),
                ("alarm_type", models.CharField(choices=APPROVAL_STATUS_CHOICES, max_length=2)),
                ("application_type", models.CharField(choices=APPLICATION_TYPE_CHOICES, max_length=20)),
                ("application_seq", models.BigIntegerField()),
                ("message", models.CharField(blank=True, default="", max_length=500)),
                ("is_read", models.BooleanField(db_index=True, default=False)),
                (
                    "redirect_url",
                    models.CharField(
                        blank=True,
                        choices=[("/my-applications", "My applications"), ("/approval-list", "Approval list")],
                        default="",
                        max_length=200,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "tbl_users_alarm",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["user_id", "is_read"], name="alarm_user_read_idx"),
                    models.Index(fields=["application_type", "application_seq"], name="alarm_app_key_idx"),
                ],
            },
        ),
    ]
