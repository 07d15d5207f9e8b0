# storefront_cart/repos/cart_repo.py
from typing import List, Tuple

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from storefront_cart.data.models.cart import CartModel
from storefront_cart.data.models.cart_item import CartItemModel
from storefront_cart.data.models.product import ProductGroupModel, ProductModel
from storefront_cart.domain.identifiers import Owner
from storefront_cart.utils.clock import utc_now


class CartRepo:
    """
    Data access for carts and their items.
    Methods only flush; the service decides when the transaction commits.
    """

    def __init__(self, db: Session):
        self.db = db

    # ---- carts ----
    def get_cart_by_owner(self, owner: Owner) -> CartModel | None:
        column = CartModel.user_id if owner.is_user else CartModel.session_id
        stmt = select(CartModel).where(column == owner.value).limit(1)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_cart(self, owner: Owner) -> CartModel:
        now = utc_now()
        cart = CartModel(
            user_id=owner.value if owner.is_user else None,
            session_id=None if owner.is_user else owner.value,
            last_activity_at=now,
            created_at=now,
            updated_at=now,
        )
        self.db.add(cart)
        self.db.flush()
        return cart

    def touch_cart(self, cart: CartModel) -> None:
        now = utc_now()
        cart.last_activity_at = now
        cart.updated_at = now
        self.db.flush()

    def delete_cart(self, cart: CartModel) -> None:
        # pending item moves must reach the database before the cascade fires
        self.db.flush()
        self.db.delete(cart)
        self.db.flush()

    # ---- items ----
    def get_cart_items(self, cart_id: str) -> List[CartItemModel]:
        stmt = select(CartItemModel).where(CartItemModel.cart_id == cart_id)
        return list(self.db.execute(stmt).scalars().all())

    def get_cart_item(self, cart_id: str, product_id: str) -> CartItemModel | None:
        stmt = select(CartItemModel).where(
            CartItemModel.cart_id == cart_id,
            CartItemModel.product_id == product_id,
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_cart_item_with_product(
        self, cart_id: str, item_id: str
    ) -> Tuple[CartItemModel, ProductModel] | None:
        stmt = (
            select(CartItemModel, ProductModel)
            .join(ProductModel, CartItemModel.product_id == ProductModel.id)
            .where(CartItemModel.cart_id == cart_id, CartItemModel.id == item_id)
            .limit(1)
        )
        row = self.db.execute(stmt).first()
        return (row[0], row[1]) if row else None

    def get_cart_rows(
        self, cart_id: str
    ) -> List[Tuple[CartItemModel, ProductModel, ProductGroupModel]]:
        stmt = (
            select(CartItemModel, ProductModel, ProductGroupModel)
            .join(ProductModel, CartItemModel.product_id == ProductModel.id)
            .join(ProductGroupModel, ProductModel.product_group_id == ProductGroupModel.id)
            .where(CartItemModel.cart_id == cart_id)
            .order_by(CartItemModel.created_at, CartItemModel.id)
        )
        return [(r[0], r[1], r[2]) for r in self.db.execute(stmt).all()]

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, cart_id: str, item_id: str) -> int:
        stmt = (
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id, CartItemModel.id == item_id)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount

    def delete_cart_items(self, cart_id: str) -> int:
        stmt = (
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount
