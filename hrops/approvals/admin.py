from django.contrib import admin
from .models import (
    Employee, VacationHistory, ExpenseClaim, RentalSupport, RentalProposal,
    ApprovalRejection, UserAlarm,
)


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ("user_id", "name", "division", "team", "auth_val")
    list_filter = ("division", "auth_val")
    search_fields = ("name", "email", "team")


class ApplicationAdmin(admin.ModelAdmin):
    list_display = ("id", "user_id", "approval_status", "created_at", "tl_approved_by", "dh_approved_by")
    list_filter = ("approval_status",)
    search_fields = ("user_id",)
    # status only changes through the approval engine
    readonly_fields = ("approval_status", "tl_approved_by", "tl_approved_at", "dh_approved_by", "dh_approved_at")


admin.site.register(VacationHistory, ApplicationAdmin)
admin.site.register(ExpenseClaim, ApplicationAdmin)
admin.site.register(RentalSupport, ApplicationAdmin)
admin.site.register(RentalProposal, ApplicationAdmin)


@admin.register(ApprovalRejection)
class ApprovalRejectionAdmin(admin.ModelAdmin):
    list_display = ("application_type", "application_seq", "rejection_level", "rejected_by", "created_at")
    list_filter = ("application_type", "rejection_level")

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(UserAlarm)
class UserAlarmAdmin(admin.ModelAdmin):
    list_display = ("user_id", "alarm_type", "application_type", "application_seq", "is_read", "created_at")
    list_filter = ("alarm_type", "application_type", "is_read")
    search_fields = ("user_id", "message")
