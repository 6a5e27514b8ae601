"""
Checkout and stock API views.

Views only parse JSON, call the services and render the result; all
validation and transaction handling lives in apps.web.restaurant.services.
"""

import json
import logging
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods, require_POST

from apps.web.core.decorators import api_login_required
from apps.web.restaurant.exceptions import OrderingError, ValidationFailed
from apps.web.restaurant.models import MenuItem, Order, StockAction
from apps.web.restaurant.serializers import (
    CheckoutResponse,
    CustomerSchema,
    MenuItemStockSchema,
    OrderItemResponseSchema,
    OrderSchema,
    StockChangeSchema,
    StockLevelResponse,
    StockUpdateResponse,
    TableSchema,
)
from apps.web.restaurant.services import (
    adjust_stock,
    checkout as place_checkout,
    get_menu_item,
    parse_checkout_request,
    parse_stock_update,
)

logger = logging.getLogger(__name__)


def _json_response(data: dict[str, Any], status: int = 200) -> JsonResponse:
    return JsonResponse(data, status=status)


def _error_response(error: OrderingError) -> JsonResponse:
    """Render an OrderingError as its JSON payload."""
    if error.status_code < 500:
        logger.warning("Rejected request (%s): %s", error.code, error.message)
    return _json_response(error.to_payload(), status=error.status_code)


def _parse_json(request: HttpRequest) -> Any:
    try:
        return json.loads(request.body)
    except json.JSONDecodeError as exc:
        raise ValidationFailed("Invalid JSON in request body") from exc


def _serialize_order(order: Order) -> OrderSchema:
    """Serialize an Order with its table, customer and items."""
    customer = order.customer
    items = [
        OrderItemResponseSchema(
            id=item.pk,
            menu_name=item.menu_item.name,
            quantity=item.quantity,
            price=item.price,
            subtotal=item.subtotal,
            customization=item.customization,
        )
        for item in order.items.all()
    ]
    return OrderSchema(
        id=order.pk,
        order_number=order.order_number,
        customer=CustomerSchema(
            id=customer.pk,
            name=customer.get_full_name() or customer.get_username(),
            email=customer.email,
        ),
        table=TableSchema(
            id=order.table.pk,
            name=order.table.name,
            desc=order.table.description,
        ),
        total_amount=order.total_amount,
        order_status=order.order_status,
        payment_status=order.payment_status,
        order_time=order.order_time,
        items=items,
    )


def _serialize_menu_item(item: MenuItem) -> MenuItemStockSchema:
    return MenuItemStockSchema(
        id=item.pk,
        category_id=item.category_id,
        category_name=item.category.name,
        name=item.name,
        desc=item.description,
        image=item.image,
        is_available=item.is_available,
        price=item.price,
        stock=item.stock,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


@csrf_exempt
@require_POST
@api_login_required
def checkout(request: HttpRequest) -> JsonResponse:
    """
    POST /api/checkout

    Place an order for a table from the customer's cart.

    Request body: {tableId, items: [{id, quantity, customization?}]}
    Response: CheckoutResponse (201) or error payload (400/401/500)
    """
    try:
        body = _parse_json(request)
        table_id, items = parse_checkout_request(body)
        order = place_checkout(request.user, table_id, items)
    except OrderingError as e:
        return _error_response(e)

    response = CheckoutResponse(order=_serialize_order(order))
    return _json_response(response.model_dump(mode="json"), status=201)


@api_login_required
def _update_stock(request: HttpRequest, menu_item_id: str) -> JsonResponse:
    try:
        update = parse_stock_update(_parse_json(request))
        menu_item, change = adjust_stock(request.user, menu_item_id, update)
    except OrderingError as e:
        return _error_response(e)

    verb = StockAction(update.action).label
    response = StockUpdateResponse(
        message=f"Stock updated successfully. {verb} {update.quantity} items.",
        menu_item=_serialize_menu_item(menu_item),
        stock_change=StockChangeSchema(**change.as_dict()),
    )
    return _json_response(response.model_dump(mode="json"))


def _stock_level(menu_item_id: str) -> JsonResponse:
    try:
        menu_item = get_menu_item(menu_item_id)
    except OrderingError as e:
        return _error_response(e)

    response = StockLevelResponse(
        id=menu_item.pk,
        name=menu_item.name,
        category=menu_item.category.name,
        current_stock=menu_item.stock,
        is_available=menu_item.is_available,
        stock_status=str(menu_item.stock_status),
    )
    return _json_response(response.model_dump(mode="json"))


@csrf_exempt
@require_http_methods(["GET", "PUT"])
def menu_stock(request: HttpRequest, menu_item_id: str) -> JsonResponse:
    """
    GET /api/menu/{menu_item_id}/stock
    PUT /api/menu/{menu_item_id}/stock

    GET returns the current stock level (public).
    PUT applies an add/subtract/set adjustment (authenticated).

    Request body (PUT): {action, quantity, reason?}
    Response (PUT): StockUpdateResponse (200) or error payload
    """
    if request.method == "PUT":
        return _update_stock(request, menu_item_id)
    return _stock_level(menu_item_id)
