# storefront_cart/services/validation_service.py
from typing import Iterable

from sqlalchemy.orm import Session

from storefront_cart.domain.schemas import (
    CartItemValidation,
    CartView,
    SuggestedAction,
    ValidationErrorType,
    ValidationResult,
)
from storefront_cart.repos.product_repo import ProductRepo
from storefront_cart.services.unit_of_work import unit_of_work


class CartValidator:
    """
    Re-checks a client-side cart snapshot against the live catalog.

    An unavailable product is reported alone; stock and price drift are
    checked independently, so one item can carry both.
    """

    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepo(db)

    def validate_cart(self, items: Iterable[CartView]) -> ValidationResult:
        errors = []

        with unit_of_work(self.db, "Failed to validate cart items"):
            for item in items:
                product = self.products.get_product(item.product_id)

                if product is None or not product.is_available:
                    errors.append(
                        CartItemValidation(
                            item_id=item.id,
                            type=ValidationErrorType.PRODUCT_UNAVAILABLE,
                            message=f"{item.name} is no longer available",
                            suggested_action=SuggestedAction.REMOVE,
                        )
                    )
                    continue

                if product.stock < item.quantity:
                    errors.append(
                        CartItemValidation(
                            item_id=item.id,
                            type=ValidationErrorType.OUT_OF_STOCK,
                            message=f"{item.name} only has {product.stock} items left",
                            suggested_action=SuggestedAction.UPDATE_QUANTITY,
                            current_stock=product.stock,
                        )
                    )

                if product.price != item.price:
                    errors.append(
                        CartItemValidation(
                            item_id=item.id,
                            type=ValidationErrorType.PRICE_CHANGED,
                            message=f"Price for {item.name} has changed",
                            suggested_action=SuggestedAction.UPDATE_PRICE,
                            current_price=product.price,
                        )
                    )

        return ValidationResult(valid=not errors, errors=errors)
