from django.db import models
from .choices import ApprovalStatus


class ApprovalTrackedModel(models.Model):
    """
    Columns every application table shares with the approval engine.
    Rows link to the directory only through ``user_id`` (no FK).
    """
    user_id = models.BigIntegerField(db_index=True)
    approval_status = models.CharField(
        max_length=2, choices=ApprovalStatus.choices,
        null=True, blank=True, default=ApprovalStatus.SUBMITTED, db_index=True,
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    # approval trail
    tl_approved_by = models.BigIntegerField(null=True, blank=True)
    tl_approved_at = models.DateTimeField(null=True, blank=True)
    dh_approved_by = models.BigIntegerField(null=True, blank=True)
    dh_approved_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        abstract = True
        ordering = ["-created_at", "-id"]


class VacationHistory(ApprovalTrackedModel):
    start_date = models.DateField()
    end_date = models.DateField()
    period = models.DecimalField(max_digits=5, decimal_places=1, null=True, blank=True)
    vacation_type = models.CharField(max_length=20, blank=True, default="")
    reason = models.TextField(blank=True, default="")
    used_vacation_days = models.DecimalField(max_digits=5, decimal_places=1, null=True, blank=True)

    class Meta(ApprovalTrackedModel.Meta):
        db_table = "tbl_vacation_history"

    def __str__(self):
        return f"VAC#{self.pk} user={self.user_id} {self.start_date}→{self.end_date} [{self.approval_status}]"


class ExpenseClaim(ApprovalTrackedModel):
    request_date = models.DateField(null=True, blank=True)
    billing_yy_month = models.IntegerField(null=True, blank=True, help_text="YYYYMM")
    child_cnt = models.IntegerField(null=True, blank=True)
    total_amount = models.BigIntegerField(null=True, blank=True)

    class Meta(ApprovalTrackedModel.Meta):
        db_table = "tbl_expense_claim"

    def __str__(self):
        return f"EXP#{self.pk} user={self.user_id} {self.billing_yy_month} [{self.approval_status}]"


class RentalSupport(ApprovalTrackedModel):
    request_date = models.DateField(null=True, blank=True)
    billing_yy_month = models.IntegerField(null=True, blank=True, help_text="YYYYMM")
    contract_start_date = models.DateField(null=True, blank=True)
    contract_end_date = models.DateField(null=True, blank=True)
    contract_monthly_rent = models.BigIntegerField(null=True, blank=True)
    billing_amount = models.BigIntegerField(null=True, blank=True)
    payment_date = models.DateField(null=True, blank=True)

    class Meta(ApprovalTrackedModel.Meta):
        db_table = "tbl_rental_support"

    def __str__(self):
        return f"RNT#{self.pk} user={self.user_id} {self.billing_yy_month} [{self.approval_status}]"


class RentalProposal(ApprovalTrackedModel):
    previous_address = models.CharField(max_length=300, blank=True, default="")
    rental_address = models.CharField(max_length=300, blank=True, default="")
    contract_start_date = models.DateField(null=True, blank=True)
    contract_end_date = models.DateField(null=True, blank=True)
    contract_monthly_rent = models.BigIntegerField(null=True, blank=True)
    billing_amount = models.BigIntegerField(null=True, blank=True)
    billing_start_date = models.DateField(null=True, blank=True)
    billing_reason = models.TextField(blank=True, default="")

    class Meta(ApprovalTrackedModel.Meta):
        db_table = "tbl_rental_approval"

    def __str__(self):
        return f"RPR#{self.pk} user={self.user_id} {self.rental_address} [{self.approval_status}]"
