"""Ordering and stock exceptions.

Every exception renders to the JSON error payload returned by the API:
a human-readable ``error`` message, a machine-readable ``code`` and, where
applicable, a detail list keyed to the offending items or fields.
"""

from typing import Any


class OrderingError(Exception):
    """Base exception for checkout and stock errors."""

    status_code = 400
    code = "ordering_error"
    detail_field: str | None = None

    def __init__(self, message: str, details: list[Any] | None = None) -> None:
        self.message = message
        self.details = details or []
        super().__init__(message)

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON error body."""
        payload: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.detail_field:
            payload[self.detail_field] = self.details
        return payload


class ValidationFailed(OrderingError):
    """Malformed or missing input."""

    code = "validation_failed"
    detail_field = "details"


class MalformedLineItem(ValidationFailed):
    """One or more cart lines lack a valid id or quantity."""

    code = "malformed_line_item"
    detail_field = "invalid_items"

    def __init__(self, invalid_items: list[dict[str, Any]]) -> None:
        super().__init__("All items must have valid ID and quantity", invalid_items)


class NotFound(OrderingError):
    """Referenced entity does not exist."""

    status_code = 404
    code = "not_found"


class BusinessRuleViolation(OrderingError):
    """Request is well-formed but conflicts with current state."""

    code = "business_rule_violation"


class InvalidTable(BusinessRuleViolation):
    """Checkout references a table that does not exist."""

    code = "invalid_table"
    detail_field = "table_id"

    def __init__(self, table_id: str) -> None:
        super().__init__("Invalid table selected", [table_id])
        self.table_id = table_id


class UnavailableItems(BusinessRuleViolation):
    """Menu items are missing or switched off."""

    code = "unavailable_items"
    detail_field = "missing_items"

    def __init__(self, missing_ids: list[str]) -> None:
        super().__init__(
            "Some menu items are not available or do not exist", missing_ids
        )


class InsufficientStock(BusinessRuleViolation):
    """Requested quantities exceed stock on hand."""

    code = "insufficient_stock"
    detail_field = "stock_errors"

    def __init__(self, stock_errors: list[dict[str, Any]]) -> None:
        super().__init__("Insufficient stock for some items", stock_errors)


class TransactionFailure(OrderingError):
    """The atomic apply step failed for infrastructure reasons."""

    status_code = 500
    code = "transaction_failure"
