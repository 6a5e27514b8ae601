"""
Activity services - writing audit log entries.

record() is meant to run inside the caller's transaction so the entry
commits or rolls back with the change it describes. record_failure() runs
after a transaction has been rolled back and must never raise.
"""

import logging
from typing import TYPE_CHECKING

from apps.web.activity.models import LogAction, LogEntry

if TYPE_CHECKING:
    from apps.web.core.models import User


logger = logging.getLogger(__name__)


def record(
    action: LogAction | str,
    message: str,
    user: "User | None" = None,
) -> LogEntry:
    """
    Append an entry to the audit log.

    Args:
        action: LogAction tag
        message: Human-readable description
        user: Actor responsible for the change (None for system actions)

    Returns:
        The created LogEntry
    """
    return LogEntry.objects.create(
        user=user if user is not None and user.is_authenticated else None,
        action=action,
        message=message,
    )


def record_failure(
    action: LogAction | str,
    message: str,
    user: "User | None" = None,
) -> LogEntry | None:
    """
    Best-effort audit entry for a failed operation.

    Returns None instead of raising when the write itself fails, so the
    original error is what the caller sees.
    """
    try:
        return record(action, message, user=user)
    except Exception:
        logger.exception("Failed to write %s log entry: %s", action, message)
        return None
