# storefront_cart/utils/cart_totals.py
from typing import Iterable

from storefront_cart.domain.schemas import CartView


def calculate_item_subtotal(item: CartView) -> int:
    return item.price * item.quantity


def calculate_cart_total(items: Iterable[CartView]) -> int:
    return sum((calculate_item_subtotal(i) for i in items), 0)


def get_total_item_count(items: Iterable[CartView]) -> int:
    return sum(i.quantity for i in items)
