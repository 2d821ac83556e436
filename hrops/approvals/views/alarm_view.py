from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import permissions, serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from approvals.exceptions import ApprovalError
from approvals.serializers.alarm_serializer import UserAlarmSerializer, MarkAllReadSerializer
from approvals.services import alarm_service as svc
from .utils import error_response, require_int, path_int, q_int, std_errors


class AlarmViewSet(viewsets.ViewSet):
    permission_classes = [permissions.AllowAny]

    # GET /alarms/?user_id=123
    @extend_schema(
        tags=["Alarm"],
        summary="All alarms of a user (recently read + unread), newest first",
        parameters=[q_int("user_id", "Recipient user_id", required=True)],
        responses={200: UserAlarmSerializer(many=True), **std_errors()},
    )
    def list(self, request):
        try:
            user_id = require_int(request.query_params.get("user_id"), "user_id")
        except ApprovalError as e:
            return error_response(e)
        return Response(UserAlarmSerializer(svc.list_all(user_id), many=True).data)

    # GET /alarms/unread/?user_id=123
    @extend_schema(
        tags=["Alarm"],
        summary="Unread alarms of a user, newest first",
        parameters=[q_int("user_id", "Recipient user_id", required=True)],
        responses={200: UserAlarmSerializer(many=True), **std_errors()},
    )
    @action(detail=False, methods=["get"])
    def unread(self, request):
        try:
            user_id = require_int(request.query_params.get("user_id"), "user_id")
        except ApprovalError as e:
            return error_response(e)
        return Response(UserAlarmSerializer(svc.list_unread(user_id), many=True).data)

    # POST /alarms/{id}/read/
    @extend_schema(
        tags=["Alarm"],
        summary="Mark one alarm as read",
        parameters=[path_int("id", "Alarm id")],
        request=None,
        responses={200: UserAlarmSerializer, **std_errors()},
    )
    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        try:
            alarm = svc.mark_read(require_int(pk, "id"))
        except ApprovalError as e:
            return error_response(e)
        return Response(UserAlarmSerializer(alarm).data)

    # POST /alarms/read-all/
    @extend_schema(
        tags=["Alarm"],
        summary="Mark every alarm of a user as read",
        request=MarkAllReadSerializer,
        responses={200: inline_serializer(name="MarkAllReadResult", fields={"updated": serializers.IntegerField()})},
    )
    @action(detail=False, methods=["post"], url_path="read-all")
    def read_all(self, request):
        ser = MarkAllReadSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        n = svc.mark_all_read(ser.validated_data["user_id"])
        return Response({"updated": n}, status=status.HTTP_200_OK)
