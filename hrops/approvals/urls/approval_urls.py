# -*- coding: utf-8 -*-
from __future__ import annotations
from django.urls import path
from approvals.views.approval_view import ApprovalViewSet

app_name = "approval"

pending = ApprovalViewSet.as_view({"get": "pending"})
approve = ApprovalViewSet.as_view({"post": "approve"})
reject = ApprovalViewSet.as_view({"post": "reject"})
resubmit = ApprovalViewSet.as_view({"post": "resubmit"})
rejections = ApprovalViewSet.as_view({"get": "rejections"})

urlpatterns = [
    path("pending/", pending, name="pending"),
    path("<str:application_type>/<int:seq>/approve/", approve, name="approve"),
    path("<str:application_type>/<int:seq>/reject/", reject, name="reject"),
    path("<str:application_type>/<int:seq>/resubmit/", resubmit, name="resubmit"),
    path("<str:application_type>/<int:seq>/rejections/", rejections, name="rejections"),
]
