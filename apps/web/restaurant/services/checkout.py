"""
Checkout service - turns a cart into a persisted order.

Handles:
1. Validating the table, cart lines, availability and stock (no writes)
2. Snapshotting unit prices into a CheckoutQuote
3. Creating the order and items, decrementing stock and writing the audit
   log in one transaction
4. Best-effort error logging when the transaction fails
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from django.db import DatabaseError, transaction
from django.db.models import F
from django.utils import timezone

from pydantic import ValidationError as PydanticValidationError

from apps.web.activity.models import LogAction
from apps.web.activity.services import record, record_failure
from apps.web.restaurant.exceptions import (
    InsufficientStock,
    InvalidTable,
    MalformedLineItem,
    TransactionFailure,
    UnavailableItems,
    ValidationFailed,
)
from apps.web.restaurant.models import (
    MenuItem,
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    Table,
)
from apps.web.restaurant.serializers import CartLine, CheckoutRequest
from apps.web.restaurant.services.validation import error_details

if TYPE_CHECKING:
    from apps.web.core.models import User


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuotedLine:
    """A validated cart line with the unit price captured at validation."""

    menu_item_id: str
    menu_name: str
    unit_price: int
    quantity: int
    customization: str | None = None

    @property
    def subtotal(self) -> int:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class CheckoutQuote:
    """Everything place_order needs; prices are not re-read after this."""

    table: Table
    lines: tuple[QuotedLine, ...]

    @property
    def total_amount(self) -> int:
        return sum(line.subtotal for line in self.lines)


def parse_checkout_request(payload: Any) -> tuple[str, list[Any]]:
    """
    Validate the outer shape of a checkout request body.

    Returns:
        Tuple of (table_id, raw_items)

    Raises:
        ValidationFailed: If tableId or a non-empty items list is missing
    """
    try:
        request = CheckoutRequest.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationFailed(
            "Table ID and items are required", error_details(e)
        ) from e
    return request.table_id, request.items


def parse_cart_lines(items: list[Any]) -> list[CartLine]:
    """
    Validate every cart line, collecting all failures.

    Raises:
        MalformedLineItem: Listing each offending line with its index
    """
    lines: list[CartLine] = []
    invalid_items: list[dict[str, Any]] = []

    for index, raw in enumerate(items):
        try:
            lines.append(CartLine.model_validate(raw))
        except PydanticValidationError as e:
            invalid_items.append(
                {"index": index, "item": raw, "errors": error_details(e)}
            )

    if invalid_items:
        raise MalformedLineItem(invalid_items)

    return lines


def quote_checkout(table_id: str, items: list[Any]) -> CheckoutQuote:
    """
    Validate a cart against the table list and live inventory.

    Checks run in order and stop at the first failing stage:
    table, line shape, availability, stock.

    Args:
        table_id: Table the order is for
        items: Raw cart lines ({id, quantity, customization?})

    Returns:
        CheckoutQuote with unit prices snapshotted

    Raises:
        InvalidTable, MalformedLineItem, UnavailableItems, InsufficientStock
    """
    try:
        table = Table.objects.get(pk=table_id)
    except Table.DoesNotExist as exc:
        raise InvalidTable(table_id) from exc

    lines = parse_cart_lines(items)

    menu_ids = list(dict.fromkeys(line.id for line in lines))
    menu_items = {
        item.pk: item
        for item in MenuItem.objects.filter(pk__in=menu_ids, is_available=True)
    }

    missing_ids = [menu_id for menu_id in menu_ids if menu_id not in menu_items]
    if missing_ids:
        raise UnavailableItems(missing_ids)

    # Repeated lines for one item draw on the same stock
    requested: dict[str, int] = {}
    for line in lines:
        requested[line.id] = requested.get(line.id, 0) + line.quantity

    stock_errors = [
        {
            "menu_id": menu_id,
            "menu_name": menu_items[menu_id].name,
            "requested": quantity,
            "available": menu_items[menu_id].stock,
        }
        for menu_id, quantity in requested.items()
        if quantity > menu_items[menu_id].stock
    ]
    if stock_errors:
        raise InsufficientStock(stock_errors)

    quoted = tuple(
        QuotedLine(
            menu_item_id=line.id,
            menu_name=menu_items[line.id].name,
            unit_price=menu_items[line.id].price,
            quantity=line.quantity,
            customization=line.customization or None,
        )
        for line in lines
    )
    return CheckoutQuote(table=table, lines=quoted)


def _decrement_stock(line: QuotedLine) -> None:
    """
    Take line.quantity off the item's stock, only if enough remains.

    Raises:
        UnavailableItems: If the item was removed or switched off after the quote
        InsufficientStock: If a concurrent checkout or adjustment got there first
    """
    updated = MenuItem.objects.filter(
        pk=line.menu_item_id,
        is_available=True,
        stock__gte=line.quantity,
    ).update(stock=F("stock") - line.quantity, updated_at=timezone.now())

    if not updated:
        current = (
            MenuItem.objects.filter(pk=line.menu_item_id)
            .values_list("stock", "is_available")
            .first()
        )
        if current is None or not current[1]:
            raise UnavailableItems([line.menu_item_id])

        raise InsufficientStock(
            [
                {
                    "menu_id": line.menu_item_id,
                    "menu_name": line.menu_name,
                    "requested": line.quantity,
                    "available": current[0],
                }
            ]
        )


def place_order(quote: CheckoutQuote, customer: "User") -> Order:
    """
    Persist a quoted cart as an order.

    All writes share one transaction: the order, its items, the stock
    decrements and the audit log entries commit together or not at all.

    Args:
        quote: Validated cart from quote_checkout
        customer: Authenticated actor placing the order

    Returns:
        The created Order

    Raises:
        UnavailableItems: If an item was switched off after the quote was taken
        InsufficientStock: If stock ran out after the quote was taken
    """
    with transaction.atomic():
        order = Order.objects.create(
            customer=customer,
            table=quote.table,
            order_status=OrderStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            total_amount=quote.total_amount,
            order_time=timezone.now(),
        )

        OrderItem.objects.bulk_create(
            [
                OrderItem(
                    order=order,
                    menu_item_id=line.menu_item_id,
                    price=line.unit_price,
                    quantity=line.quantity,
                    subtotal=line.subtotal,
                    customization=line.customization,
                    position=position,
                )
                for position, line in enumerate(quote.lines)
            ]
        )

        for line in quote.lines:
            _decrement_stock(line)

        record(
            LogAction.ORDER_CREATED,
            f"Order {order.order_number} created for table {quote.table.name} "
            f"with {len(quote.lines)} items. Total: {quote.total_amount}",
            user=customer,
        )
        for line in quote.lines:
            record(
                LogAction.STOCK_UPDATED,
                f"Stock reduced for {line.menu_name}: -{line.quantity} "
                f"(Order: {order.order_number})",
                user=customer,
            )

    return order


def checkout(customer: "User", table_id: str, items: list[Any]) -> Order:
    """
    Validate a cart and place the order.

    This is the main entry point for checkout. It:
    1. Quotes the cart (validation and price snapshot, no writes)
    2. Places the order atomically
    3. On any database failure, writes an order_error log entry outside the
       rolled-back transaction and raises TransactionFailure

    Args:
        customer: Authenticated actor placing the order
        table_id: Table the order is for
        items: Raw cart lines

    Returns:
        The created Order with table, customer and items loaded

    Raises:
        OrderingError subclasses for validation and business rule failures;
        TransactionFailure if a database read or write fails.
    """
    try:
        quote = quote_checkout(table_id, items)
        order = place_order(quote, customer)
        placed = (
            Order.objects.select_related("table", "customer")
            .prefetch_related("items__menu_item")
            .get(pk=order.pk)
        )
    except DatabaseError as e:
        logger.exception("Checkout failed for table %s", table_id)
        record_failure(
            LogAction.ORDER_ERROR,
            f"Order creation failed: {e}",
            user=customer,
        )
        raise TransactionFailure("Failed to process checkout") from e

    logger.info(
        "Order %s placed for table %s: %d lines, total %d",
        order.order_number,
        quote.table.name,
        len(quote.lines),
        quote.total_amount,
    )

    return placed
