# views/utils.py
"""
Shared tooling for the approval views:
- drf-spectacular helpers (error schema, param shortcuts, standard error responses)
- translation of engine errors into HTTP responses
"""
import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, inline_serializer
from drf_spectacular.types import OpenApiTypes
from rest_framework import serializers, status
from rest_framework.response import Response

from approvals.exceptions import (
    ApprovalError, ForbiddenError, InvalidStateError, NotFound, ValidationError,
)
from approvals.models import ApplicationType

logger = logging.getLogger(__name__)

# ---- Reusable error schema
ErrorSerializer = inline_serializer(
    name="Error",
    fields={"detail": serializers.CharField(), "code": serializers.CharField()}
)

# ---- Param helpers

def path_int(name: str, description: str):
    return OpenApiParameter(name, OpenApiTypes.INT, OpenApiParameter.PATH, description=description)

def path_str(name: str, description: str):
    return OpenApiParameter(name, OpenApiTypes.STR, OpenApiParameter.PATH, description=description)

def q_int(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.INT, OpenApiParameter.QUERY, required=required, description=description)

def q_str(name: str, description: str, required: bool = False):
    return OpenApiParameter(name, OpenApiTypes.STR, OpenApiParameter.QUERY, required=required, description=description)


def std_errors(extra: dict | None = None):
    """Standard error response mapping you can merge into responses=..."""
    errs = {
        400: OpenApiResponse(ErrorSerializer, description="Bad Request"),
        403: OpenApiResponse(ErrorSerializer, description="Forbidden"),
        404: OpenApiResponse(ErrorSerializer, description="Not Found"),
    }
    if extra:
        errs.update(extra)
    return errs


# ---- Engine errors → HTTP

_STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST, "validation_error"),
    (ForbiddenError, status.HTTP_403_FORBIDDEN, "forbidden"),
    (NotFound, status.HTTP_404_NOT_FOUND, "not_found"),
    (InvalidStateError, status.HTTP_409_CONFLICT, "already_processed"),
)

def error_response(ex: ApprovalError) -> Response:
    for cls, http_status, code in _STATUS_BY_ERROR:
        if isinstance(ex, cls):
            return Response({"detail": ex.message, "code": code}, status=http_status)
    logger.error("[views] unmapped approval error %s: %s", type(ex).__name__, ex.message)
    return Response({"detail": ex.message, "code": "error"}, status=status.HTTP_400_BAD_REQUEST)


def parse_application_type(raw) -> ApplicationType:
    try:
        return ApplicationType.parse(raw)
    except ValueError as ex:
        raise NotFound(str(ex), {"application_type": raw}) from None


def require_int(raw, name: str) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Missing/invalid {name}", {"field": name}) from None
