# storefront_cart/data/models/cart_item.py
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront_cart.data.database import Base
from storefront_cart.utils.clock import utc_now


class CartItemModel(Base):
    __tablename__ = "cart_items"
    __table_args__ = (UniqueConstraint("cart_id", "product_id", name="u_cart_product"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    cart_id = Column(
        String(36),
        ForeignKey("carts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # no foreign key: a deleted product leaves the line behind, joins skip it
    product_id = Column(String(36), nullable=False, index=True)

    quantity = Column(Integer, nullable=False)
    variant_selections = Column(Text, nullable=False, default="{}")

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    cart = relationship("CartModel", back_populates="items")
