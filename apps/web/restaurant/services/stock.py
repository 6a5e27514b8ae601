"""
Stock service - manual stock adjustments by staff.

compute_stock_change() is a pure function; adjust_stock() applies it to a
locked row and writes the audit entry in the same transaction.
"""

import logging
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from django.db import DatabaseError, transaction

from pydantic import ValidationError as PydanticValidationError

from apps.web.activity.models import LogAction
from apps.web.activity.services import record, record_failure
from apps.web.restaurant.exceptions import (
    NotFound,
    TransactionFailure,
    ValidationFailed,
)
from apps.web.restaurant.models import MenuItem, StockAction
from apps.web.restaurant.serializers import MAX_QUANTITY, StockUpdateRequest
from apps.web.restaurant.services.validation import error_details

if TYPE_CHECKING:
    from apps.web.core.models import User


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockChange:
    """Before/after view of one stock adjustment."""

    action: str
    previous_stock: int
    new_stock: int
    change: int

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)

    def describe(self, menu_name: str, reason: str | None = None) -> str:
        """Audit log message, e.g. 'Stock subtract for "Tea": -8 (8 → 0)'."""
        sign = "+" if self.change > 0 else ""
        message = (
            f'Stock {self.action} for "{menu_name}": {sign}{self.change} '
            f"({self.previous_stock} → {self.new_stock})"
        )
        if reason:
            message += f" - Reason: {reason}"
        return message


def _quantity_error(message: str) -> ValidationFailed:
    return ValidationFailed(
        "Validation failed", [{"field": "quantity", "message": message}]
    )


def compute_stock_change(current_stock: int, action: str, quantity: int) -> StockChange:
    """
    Work out the new stock level for an adjustment.

    subtract is clamped at zero and the recorded change is the amount
    actually removed, not the amount requested.

    Raises:
        ValidationFailed: For an unknown action, or a quantity that is negative
            or would push stock past MAX_QUANTITY
    """
    if quantity < 0:
        raise _quantity_error("Quantity must be 0 or greater")
    if quantity > MAX_QUANTITY:
        raise _quantity_error(f"Quantity must be at most {MAX_QUANTITY}")

    if action == StockAction.ADD:
        if current_stock + quantity > MAX_QUANTITY:
            raise _quantity_error(f"Stock cannot exceed {MAX_QUANTITY}")
        new_stock = current_stock + quantity
        change = quantity
    elif action == StockAction.SUBTRACT:
        new_stock = max(0, current_stock - quantity)
        change = -min(quantity, current_stock)
    elif action == StockAction.SET:
        new_stock = quantity
        change = quantity - current_stock
    else:
        raise ValidationFailed(
            "Validation failed",
            [
                {
                    "field": "action",
                    "message": "Action is required (add, set, or subtract)",
                }
            ],
        )

    return StockChange(
        action=str(action),
        previous_stock=current_stock,
        new_stock=new_stock,
        change=change,
    )


def parse_stock_update(payload: Any) -> StockUpdateRequest:
    """
    Validate a stock update request body.

    Raises:
        ValidationFailed: With one {field, message} detail per problem
    """
    try:
        return StockUpdateRequest.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationFailed("Validation failed", error_details(e)) from e


def get_menu_item(menu_item_id: str) -> MenuItem:
    """Get a menu item with its category or raise NotFound."""
    try:
        return MenuItem.objects.select_related("category").get(pk=menu_item_id)
    except MenuItem.DoesNotExist as exc:
        raise NotFound("Menu item not found") from exc


def adjust_stock(
    actor: "User",
    menu_item_id: str,
    update: StockUpdateRequest,
) -> tuple[MenuItem, StockChange]:
    """
    Apply a stock adjustment to a menu item.

    The row is locked for the duration of the transaction so the change is
    computed from the value actually being overwritten.

    Args:
        actor: Staff member making the change
        menu_item_id: Menu item to adjust
        update: Validated action, quantity and optional reason

    Returns:
        Tuple of (updated MenuItem, StockChange)

    Raises:
        NotFound: If the menu item does not exist
        TransactionFailure: If the database write fails
    """
    try:
        with transaction.atomic():
            try:
                menu_item = (
                    MenuItem.objects.select_for_update(of=("self",))
                    .select_related("category")
                    .get(pk=menu_item_id)
                )
            except MenuItem.DoesNotExist as exc:
                raise NotFound("Menu item not found") from exc

            change = compute_stock_change(
                menu_item.stock, update.action, update.quantity
            )
            menu_item.stock = change.new_stock
            menu_item.save(update_fields=["stock", "updated_at"])

            record(
                LogAction.STOCK_UPDATED,
                change.describe(menu_item.name, update.reason),
                user=actor,
            )
    except DatabaseError as e:
        logger.exception("Stock update failed for menu item %s", menu_item_id)
        record_failure(
            LogAction.STOCK_ERROR,
            f"Stock update failed for menu item {menu_item_id}: {e}",
            user=actor,
        )
        raise TransactionFailure("Failed to update stock") from e

    logger.info(
        "Stock %s for %s: %d -> %d",
        change.action,
        menu_item_id,
        change.previous_stock,
        change.new_stock,
    )

    return menu_item, change
