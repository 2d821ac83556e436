from django.urls import path, include
from rest_framework.routers import SimpleRouter
from approvals.views.alarm_view import AlarmViewSet

router = SimpleRouter()
router.register(r"", AlarmViewSet, basename="alarms")

urlpatterns = [
    path("", include(router.urls)),
]
