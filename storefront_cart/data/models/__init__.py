# import all models so SQLAlchemy registers them on Base.metadata

from storefront_cart.data.models.product import ProductGroupModel, ProductModel
from storefront_cart.data.models.cart import CartModel
from storefront_cart.data.models.cart_item import CartItemModel

__all__ = ["ProductGroupModel", "ProductModel", "CartModel", "CartItemModel"]
