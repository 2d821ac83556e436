# -*- coding: utf-8 -*-
from __future__ import annotations
from rest_framework import serializers
from approvals.models import ApprovalRejection, ApprovalStatus, ApplicationType


# ===== Decisions =====
class ApproveSerializer(serializers.Serializer):
    actor_id = serializers.IntegerField()


class RejectSerializer(serializers.Serializer):
    actor_id = serializers.IntegerField()
    # blank is let through on purpose: the engine reports it as a ValidationError
    reason = serializers.CharField(required=False, allow_blank=True, default="", max_length=1000)


class ResubmitSerializer(serializers.Serializer):
    actor_id = serializers.IntegerField()


class TransitionResultSerializer(serializers.Serializer):
    application_type = serializers.ChoiceField(choices=ApplicationType.choices)
    application_seq = serializers.IntegerField()
    approval_status = serializers.ChoiceField(choices=ApprovalStatus.choices)


# ===== Ledger =====
class ApprovalRejectionSerializer(serializers.ModelSerializer):
    rejection_level_display = serializers.CharField(source="get_rejection_level_display", read_only=True)

    class Meta:
        model = ApprovalRejection
        fields = [
            "id", "application_type", "application_seq", "rejected_by",
            "rejection_level", "rejection_level_display", "rejection_reason", "created_at",
        ]
        read_only_fields = fields


# ===== Pending view =====
class PendingItemSerializer(serializers.Serializer):
    application_type = serializers.CharField()
    seq = serializers.IntegerField()
    user_id = serializers.IntegerField()
    applicant = serializers.CharField()
    approval_status = serializers.CharField()
    created_at = serializers.DateTimeField()

    start_date = serializers.DateField(allow_null=True)
    end_date = serializers.DateField(allow_null=True)
    period = serializers.DecimalField(max_digits=5, decimal_places=1, allow_null=True)
    vacation_type = serializers.CharField(allow_null=True)
    reason = serializers.CharField(allow_null=True)
    used_vacation_days = serializers.DecimalField(max_digits=5, decimal_places=1, allow_null=True)

    request_date = serializers.DateField(allow_null=True)
    billing_yy_month = serializers.IntegerField(allow_null=True)
    child_cnt = serializers.IntegerField(allow_null=True)
    total_amount = serializers.IntegerField(allow_null=True)
    payment_date = serializers.DateField(allow_null=True)

    contract_start_date = serializers.DateField(allow_null=True)
    contract_end_date = serializers.DateField(allow_null=True)
    contract_monthly_rent = serializers.IntegerField(allow_null=True)
    billing_amount = serializers.IntegerField(allow_null=True)

    previous_address = serializers.CharField(allow_null=True)
    rental_address = serializers.CharField(allow_null=True)
    billing_start_date = serializers.DateField(allow_null=True)
    billing_reason = serializers.CharField(allow_null=True)


class ApplicationListSerializer(serializers.Serializer):
    items = PendingItemSerializer(many=True)
    total_count = serializers.IntegerField()


class PendingApprovalSerializer(serializers.Serializer):
    vacation = ApplicationListSerializer()
    expense = ApplicationListSerializer()
    rental = ApplicationListSerializer()
    rental_proposal = ApplicationListSerializer()
