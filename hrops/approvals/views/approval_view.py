# -*- coding: utf-8 -*-
from __future__ import annotations
from dataclasses import asdict

from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiResponse
from rest_framework import permissions, status, viewsets
from rest_framework.response import Response

from approvals.exceptions import ApprovalError
from approvals.serializers.approval_serializer import (
    ApproveSerializer,
    RejectSerializer,
    ResubmitSerializer,
    TransitionResultSerializer,
    ApprovalRejectionSerializer,
    PendingApprovalSerializer,
)
from approvals.services import approval_service
from approvals.selectors.actor_selector import resolve_actor
from approvals.selectors.pending_selector import list_pending
from approvals.selectors.rejection_selector import rejection_history
from .utils import (
    error_response, parse_application_type, require_int,
    path_int, path_str, q_int, q_str, std_errors,
)

TYPE_PARAM = path_str("application_type", "VACATION | EXPENSE | RENTAL_SUPPORT | RENTAL_PROPOSAL (or vacation, expense, rental, rental_proposal)")
SEQ_PARAM = path_int("seq", "Application sequence id")


def _result(application_type, seq: int, new_status) -> Response:
    data = {"application_type": application_type, "application_seq": seq, "approval_status": new_status}
    return Response(TransitionResultSerializer(data).data)


class ApprovalViewSet(viewsets.ViewSet):
    """Approver decisions, applicant resubmission and the pending-approval inbox."""
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        tags=["Approval"],
        summary="Approve (team leader or division head, derived from current status)",
        parameters=[TYPE_PARAM, SEQ_PARAM],
        request=ApproveSerializer,
        responses={200: TransitionResultSerializer, **std_errors({409: OpenApiResponse(description="Already processed")})},
    )
    def approve(self, request, application_type=None, seq=None):
        ser = ApproveSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        try:
            app_type = parse_application_type(application_type)
            actor = resolve_actor(ser.validated_data["actor_id"])
            new_status = approval_service.transition(app_type, int(seq), actor, "APPROVE")
        except ApprovalError as e:
            return error_response(e)
        return _result(app_type, int(seq), new_status)

    @extend_schema(
        tags=["Approval"],
        summary="Reject with a mandatory reason",
        parameters=[TYPE_PARAM, SEQ_PARAM],
        request=RejectSerializer,
        responses={200: TransitionResultSerializer, **std_errors({409: OpenApiResponse(description="Already processed")})},
        examples=[
            OpenApiExample(
                "Reject by team leader",
                value={"actor_id": 13, "reason": "Overlaps with the release week"},
                request_only=True,
            )
        ],
    )
    def reject(self, request, application_type=None, seq=None):
        ser = RejectSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        try:
            app_type = parse_application_type(application_type)
            actor = resolve_actor(ser.validated_data["actor_id"])
            new_status = approval_service.transition(
                app_type, int(seq), actor, "REJECT", reason=ser.validated_data.get("reason"),
            )
        except ApprovalError as e:
            return error_response(e)
        return _result(app_type, int(seq), new_status)

    @extend_schema(
        tags=["Approval"],
        summary="Resubmit a rejected application (applicant only)",
        parameters=[TYPE_PARAM, SEQ_PARAM],
        request=ResubmitSerializer,
        responses={200: TransitionResultSerializer, **std_errors({409: OpenApiResponse(description="Not rejected")})},
    )
    def resubmit(self, request, application_type=None, seq=None):
        ser = ResubmitSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        try:
            app_type = parse_application_type(application_type)
            actor = resolve_actor(ser.validated_data["actor_id"])
            new_status = approval_service.resubmit(app_type, int(seq), actor)
        except ApprovalError as e:
            return error_response(e)
        return _result(app_type, int(seq), new_status)

    @extend_schema(
        tags=["Approval"],
        summary="Rejection history (newest first)",
        parameters=[TYPE_PARAM, SEQ_PARAM],
        responses={200: ApprovalRejectionSerializer(many=True), **std_errors()},
    )
    def rejections(self, request, application_type=None, seq=None):
        try:
            app_type = parse_application_type(application_type)
            qs = rejection_history(app_type, int(seq))
        except ApprovalError as e:
            return error_response(e)
        return Response(ApprovalRejectionSerializer(qs, many=True).data)

    @extend_schema(
        tags=["Approval"],
        summary="Pending approvals for an approver, one list per application type",
        parameters=[
            q_int("actor_id", "Approver user_id", required=True),
            q_str("type", "Restrict to one application type"),
            q_int("page", "Page (1-based)"),
            q_int("page_size", "Page size (max APPROVAL_PENDING_MAX_PAGE_SIZE)"),
        ],
        responses={200: PendingApprovalSerializer, **std_errors()},
    )
    def pending(self, request):
        params = request.query_params
        try:
            actor = resolve_actor(require_int(params.get("actor_id"), "actor_id"))
            app_type = parse_application_type(params["type"]) if params.get("type") else None
            page = require_int(params["page"], "page") if params.get("page") else None
            size = require_int(params["page_size"], "page_size") if params.get("page_size") else None
        except ApprovalError as e:
            return error_response(e)
        view = list_pending(actor, application_type=app_type, page=page, size=size)
        return Response(PendingApprovalSerializer(asdict(view)).data, status=status.HTTP_200_OK)
