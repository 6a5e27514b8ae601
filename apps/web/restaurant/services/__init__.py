"""Restaurant services - checkout and stock adjustment."""

from apps.web.restaurant.services.checkout import (
    CheckoutQuote,
    QuotedLine,
    checkout,
    parse_cart_lines,
    parse_checkout_request,
    place_order,
    quote_checkout,
)
from apps.web.restaurant.services.stock import (
    StockChange,
    adjust_stock,
    compute_stock_change,
    get_menu_item,
    parse_stock_update,
)

__all__ = [
    "CheckoutQuote",
    "QuotedLine",
    "StockChange",
    "adjust_stock",
    "checkout",
    "compute_stock_change",
    "get_menu_item",
    "parse_cart_lines",
    "parse_checkout_request",
    "place_order",
    "parse_stock_update",
    "quote_checkout",
]
