# approvals/urls/__init__.py
from django.urls import path, include

urlpatterns = [
    path("approvals/", include("approvals.urls.approval_urls")),
    path("alarms/", include("approvals.urls.alarm_urls")),
]
