# storefront_cart/data/models/product.py
import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from storefront_cart.data.database import Base
from storefront_cart.utils.clock import utc_now


def _uuid() -> str:
    return str(uuid.uuid4())


class ProductGroupModel(Base):
    """Catalog entry shared by all sellable variants of one product."""

    __tablename__ = "product_groups"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True)
    category = Column(String, nullable=False)
    brand = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    images = Column(Text, nullable=True)  # JSON list of {url, isThumbnail}

    is_active = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    products = relationship(
        "ProductModel",
        back_populates="group",
        cascade="all, delete-orphan",
    )


class ProductModel(Base):
    """One sellable variant; the cart references these rows."""

    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=_uuid)
    product_group_id = Column(
        String(36),
        ForeignKey("product_groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sku = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    price = Column(Integer, nullable=False)  # smallest currency unit
    stock = Column(Integer, nullable=False, default=0)

    is_active = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    group = relationship("ProductGroupModel", back_populates="products")

    @property
    def is_available(self) -> bool:
        return bool(self.is_active) and not self.is_deleted
