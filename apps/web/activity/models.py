"""
Activity models - Append-only audit trail of staff and customer actions.
"""

from django.conf import settings
from django.db import models

from apps.web.core.models import generate_id


class LogAction(models.TextChoices):
    """Audit log action tags."""

    ORDER_CREATED = "order_created", "Order created"
    STOCK_UPDATED = "stock_updated", "Stock updated"
    ORDER_ERROR = "order_error", "Order error"
    STOCK_ERROR = "stock_error", "Stock error"


class LogEntry(models.Model):
    """
    A single audit log line.

    Never updated or deleted once written.
    """

    id = models.CharField(
        primary_key=True,
        max_length=32,
        default=generate_id,
        editable=False,
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="log_entries",
    )
    action = models.CharField(max_length=100, choices=LogAction.choices)
    message = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "log entries"
        indexes = [
            models.Index(
                fields=["action", "created_at"],
                name="log_action_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"[{self.action}] {self.message}"
