from django.db import models
from .choices import ApplicationType, RejectionLevel


class ApprovalRejection(models.Model):
    """Append-only. Newest row for a key is the reason shown to the applicant."""
    application_type = models.CharField(max_length=20, choices=ApplicationType.choices)
    application_seq = models.BigIntegerField()
    rejected_by = models.BigIntegerField()
    rejection_level = models.CharField(max_length=20, choices=RejectionLevel.choices)
    rejection_reason = models.CharField(max_length=1000)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "tbl_approval_rejection"
        ordering = ["-created_at", "-id"]
        indexes = [models.Index(fields=["application_type", "application_seq"], name="rejection_app_key_idx")]

    def __str__(self):
        return f"REJ {self.application_type}#{self.application_seq} by {self.rejected_by} ({self.rejection_level})"
