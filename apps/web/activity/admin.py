"""Admin registration for the activity log."""

from django.contrib import admin
from django.http import HttpRequest

from apps.web.activity.models import LogEntry


@admin.register(LogEntry)
class LogEntryAdmin(admin.ModelAdmin):
    """Read-only admin for log entries."""

    list_display = ["created_at", "action", "user", "message"]
    list_filter = ["action"]
    search_fields = ["message", "user__username"]
    readonly_fields = ["user", "action", "message", "created_at"]
    date_hierarchy = "created_at"

    def has_add_permission(self, request: HttpRequest) -> bool:
        return False

    def has_change_permission(
        self, request: HttpRequest, obj: LogEntry | None = None
    ) -> bool:
        return False

    def has_delete_permission(
        self, request: HttpRequest, obj: LogEntry | None = None
    ) -> bool:
        return False
