"""
Pydantic schemas for the checkout and stock APIs.

These schemas define the public API contract; request schemas validate
incoming JSON and response schemas are dumped with mode="json".
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# Largest value the stock and quantity columns can hold
MAX_QUANTITY = 2_147_483_647

# =============================================================================
# Request Schemas
# =============================================================================


class CartLine(BaseModel):
    """A single cart line submitted at checkout."""

    id: str = Field(..., min_length=1, strict=True)
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY, strict=True)
    customization: str | None = Field(default=None, max_length=500)


class CheckoutRequest(BaseModel):
    """Request body for POST /api/checkout.

    Lines are kept raw here and validated one by one so every malformed
    line can be reported.
    """

    model_config = ConfigDict(populate_by_name=True)

    table_id: str = Field(..., alias="tableId", min_length=1)
    items: list[Any] = Field(..., min_length=1)


class StockUpdateRequest(BaseModel):
    """Request body for PUT /api/menu/{id}/stock."""

    action: Literal["add", "subtract", "set"]
    quantity: int = Field(..., ge=0, le=MAX_QUANTITY)
    reason: str | None = Field(default=None, max_length=500)


# =============================================================================
# Checkout Response Schemas
# =============================================================================


class TableSchema(BaseModel):
    """Table the order was placed at."""

    id: str
    name: str
    desc: str


class CustomerSchema(BaseModel):
    """Customer who placed the order."""

    id: int
    name: str
    email: str


class OrderItemResponseSchema(BaseModel):
    """A line item in an order response."""

    id: str
    menu_name: str
    quantity: int
    price: int
    subtotal: int
    customization: str | None


class OrderSchema(BaseModel):
    """A placed order with its items."""

    id: str
    order_number: str
    customer: CustomerSchema
    table: TableSchema
    total_amount: int
    order_status: str
    payment_status: str
    order_time: datetime
    items: list[OrderItemResponseSchema]


class CheckoutResponse(BaseModel):
    """Response for POST /api/checkout."""

    success: Literal[True] = True
    order: OrderSchema


# =============================================================================
# Stock Response Schemas
# =============================================================================


class MenuItemStockSchema(BaseModel):
    """Menu item fields returned after a stock change."""

    id: str
    category_id: str
    category_name: str
    name: str
    desc: str
    image: str
    is_available: bool
    price: int
    stock: int
    created_at: datetime
    updated_at: datetime


class StockChangeSchema(BaseModel):
    """Summary of a stock adjustment."""

    previous_stock: int
    new_stock: int
    change: int
    action: str


class StockUpdateResponse(BaseModel):
    """Response for PUT /api/menu/{id}/stock."""

    success: Literal[True] = True
    message: str
    menu_item: MenuItemStockSchema
    stock_change: StockChangeSchema


class StockLevelResponse(BaseModel):
    """Response for GET /api/menu/{id}/stock."""

    id: str
    name: str
    category: str
    current_stock: int
    is_available: bool
    stock_status: Literal["low", "medium", "good"]


class ValidationErrorDetail(BaseModel):
    """A single validation error."""

    field: str
    message: str
