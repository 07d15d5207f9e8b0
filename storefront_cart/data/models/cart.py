# storefront_cart/data/models/cart.py
import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, String
from sqlalchemy.orm import relationship

from storefront_cart.data.database import Base
from storefront_cart.utils.clock import utc_now


class CartModel(Base):
    __tablename__ = "carts"
    __table_args__ = (
        # a cart belongs to a user or to an anonymous session, never both
        CheckConstraint(
            "(user_id IS NULL) <> (session_id IS NULL)",
            name="ck_cart_single_owner",
        ),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=True, unique=True, index=True)
    session_id = Column(String(255), nullable=True, unique=True, index=True)

    last_activity_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
