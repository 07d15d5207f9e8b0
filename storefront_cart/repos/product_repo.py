# storefront_cart/repos/product_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront_cart.data.models.product import ProductGroupModel, ProductModel


class ProductRepo:
    """Read access to the catalog; the cart never writes products."""

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_product_for_update(self, product_id: str) -> ProductModel | None:
        # row lock on PostgreSQL; SQLite renders no FOR UPDATE clause
        stmt = select(ProductModel).where(ProductModel.id == product_id).with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def has_products(self) -> bool:
        return self.db.execute(select(ProductModel.id).limit(1)).first() is not None

    def add_group(self, group: ProductGroupModel) -> ProductGroupModel:
        self.db.add(group)
        self.db.flush()
        return group
