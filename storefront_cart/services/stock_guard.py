# storefront_cart/services/stock_guard.py
"""Stock ceiling checks applied wherever a write touches a quantity."""
from storefront_cart.data.models.product import ProductModel
from storefront_cart.domain.errors import ValidationError


def ensure_positive_quantity(quantity: int) -> None:
    if quantity <= 0:
        raise ValidationError("Quantity must be greater than 0", {"quantity": quantity})


def ensure_available(product: ProductModel | None) -> ProductModel:
    if product is None or not product.is_available:
        raise ValidationError("Product not found or unavailable")
    return product


def ensure_stock(product: ProductModel, quantity: int, in_cart: int = 0) -> None:
    if product.stock >= in_cart + quantity:
        return
    if in_cart:
        raise ValidationError(
            f"Cannot add {quantity} more. Only {max(product.stock - in_cart, 0)} available",
            {"stock": product.stock, "inCart": in_cart},
        )
    raise ValidationError(
        f"Insufficient stock. Only {product.stock} available",
        {"stock": product.stock},
    )
