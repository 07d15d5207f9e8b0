# storefront_cart/services/cart_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront_cart.data.models.cart_item import CartItemModel
from storefront_cart.domain.errors import NotFoundError
from storefront_cart.domain.identifiers import Owner, resolve_owner
from storefront_cart.domain.schemas import CartView, ProductData
from storefront_cart.repos.cart_repo import CartRepo
from storefront_cart.repos.product_repo import ProductRepo
from storefront_cart.services.stock_guard import (
    ensure_available,
    ensure_positive_quantity,
    ensure_stock,
)
from storefront_cart.services.unit_of_work import unit_of_work
from storefront_cart.utils.clock import to_epoch_millis, utc_now
from storefront_cart.utils.json_fields import (
    dump_variant_selections,
    load_images,
    load_variant_selections,
    pick_thumbnail,
)
from storefront_cart.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart use cases for one owner (authenticated user or guest session).
    Query: get_cart. Commands: add_item, remove_item, update_quantity, clear_cart.

    Every operation accepts an Owner or a raw identifier string.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    # query
    def get_cart(self, owner: Owner | str) -> List[CartView]:
        owner = resolve_owner(owner)
        with unit_of_work(self.db, "Failed to load cart from database"):
            cart = self.repo.get_cart_by_owner(owner)
            if not cart:
                return []

            views = []
            for item, product, group in self.repo.get_cart_rows(cart.id):
                views.append(
                    CartView(
                        id=item.id,
                        product_id=product.id,
                        product_group_id=product.product_group_id,
                        name=product.name,
                        sku=product.sku,
                        price=product.price,
                        quantity=item.quantity,
                        stock=product.stock,
                        thumbnail_url=pick_thumbnail(load_images(group.images)),
                        variant_selections=load_variant_selections(item.variant_selections),
                        added_at=to_epoch_millis(item.created_at),
                        updated_at=to_epoch_millis(item.updated_at),
                    )
                )
            return views

    def has_session_cart(self, session_id: str) -> bool:
        with unit_of_work(self.db, "Failed to validate session"):
            return self.repo.get_cart_by_owner(Owner.session(session_id)) is not None

    # commands
    def add_item(self, owner: Owner | str, product: ProductData, quantity: int) -> None:
        owner = resolve_owner(owner)
        ensure_positive_quantity(quantity)

        with unit_of_work(self.db, "Failed to add item to cart"):
            live = ensure_available(self.products.get_product_for_update(product.product_id))
            ensure_stock(live, quantity)

            cart = self.repo.get_cart_by_owner(owner)
            if cart is None:
                cart = self.repo.create_cart(owner)
                logger.info(f"Created cart {cart.id} for {owner}")
            else:
                self.repo.touch_cart(cart)

            existing = self.repo.get_cart_item(cart.id, live.id)
            if existing:
                ensure_stock(live, quantity, in_cart=existing.quantity)
                existing.quantity += quantity
                existing.updated_at = utc_now()
            else:
                self.repo.add_cart_item(
                    CartItemModel(
                        cart_id=cart.id,
                        product_id=live.id,
                        quantity=quantity,
                        variant_selections=dump_variant_selections(product.variant_selections),
                    )
                )

    def remove_item(self, owner: Owner | str, item_id: str) -> None:
        owner = resolve_owner(owner)
        with unit_of_work(self.db, "Failed to remove item from cart"):
            cart = self.repo.get_cart_by_owner(owner)
            if not cart:
                raise NotFoundError("Cart not found")

            if self.repo.delete_cart_item(cart.id, item_id) == 0:
                raise NotFoundError("Cart item not found", {"itemId": item_id})

            self.repo.touch_cart(cart)

    def update_quantity(self, owner: Owner | str, item_id: str, quantity: int) -> None:
        """A quantity of zero or less is a removal."""
        if quantity <= 0:
            self.remove_item(owner, item_id)
            return

        owner = resolve_owner(owner)
        with unit_of_work(self.db, "Failed to update cart quantity"):
            cart = self.repo.get_cart_by_owner(owner)
            if not cart:
                raise NotFoundError("Cart not found")

            found = self.repo.get_cart_item_with_product(cart.id, item_id)
            if not found:
                raise NotFoundError("Cart item not found", {"itemId": item_id})
            item, product = found

            ensure_stock(product, quantity)

            item.quantity = quantity
            item.updated_at = utc_now()
            self.repo.touch_cart(cart)

    def clear_cart(self, owner: Owner | str) -> None:
        owner = resolve_owner(owner)
        with unit_of_work(self.db, "Failed to clear cart"):
            cart = self.repo.get_cart_by_owner(owner)
            if not cart:
                return

            removed = self.repo.delete_cart_items(cart.id)
            self.repo.touch_cart(cart)
            logger.info(f"Cleared {removed} items from cart {cart.id}")
