# storefront_cart/domain/schemas.py
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for everything on the wire: snake_case in Python, camelCase in JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductData(CamelModel):
    """Schema for the product being added to the cart."""

    product_id: str = Field(..., min_length=1)
    product_group_id: str = Field(..., min_length=1)
    name: str
    sku: str
    price: int = Field(..., ge=0, description="Price in the smallest currency unit")
    stock: int = Field(..., ge=0)
    thumbnail_url: Optional[str] = None
    variant_selections: Dict[str, str] = Field(default_factory=dict)


class CartView(CamelModel):
    """Schema for a cart line as shown to the shopper."""

    id: str
    product_id: str
    product_group_id: str
    name: str
    sku: str
    price: int = Field(..., ge=0)
    quantity: int = Field(..., gt=0)
    stock: int = Field(..., ge=0)
    thumbnail_url: Optional[str] = None
    variant_selections: Dict[str, str] = Field(default_factory=dict)
    added_at: int
    updated_at: int


class ValidationErrorType(str, Enum):
    OUT_OF_STOCK = "OUT_OF_STOCK"
    PRODUCT_UNAVAILABLE = "PRODUCT_UNAVAILABLE"
    PRICE_CHANGED = "PRICE_CHANGED"


class SuggestedAction(str, Enum):
    REMOVE = "REMOVE"
    UPDATE_QUANTITY = "UPDATE_QUANTITY"
    UPDATE_PRICE = "UPDATE_PRICE"


class CartItemValidation(CamelModel):
    item_id: str
    valid: bool = False
    type: ValidationErrorType
    message: str
    suggested_action: SuggestedAction
    current_stock: Optional[int] = None
    current_price: Optional[int] = None


class ValidationResult(CamelModel):
    valid: bool
    errors: List[CartItemValidation] = Field(default_factory=list)


# ---- requests ----

class AddItemIn(CamelModel):
    """Schema for POST /api/cart."""

    product: ProductData
    quantity: int


class UpdateQuantityIn(CamelModel):
    """Schema for PATCH /api/cart/{item_id}. Zero or less removes the item."""

    quantity: int


class ClaimCartIn(CamelModel):
    guest_id: Optional[str] = None


class ValidateCartIn(CamelModel):
    items: List[CartView]


# ---- responses ----

class CartData(CamelModel):
    items: List[CartView]
    total: int
    item_count: int
    last_updated: int
    session_id: Optional[str] = None


class MutationData(CamelModel):
    last_updated: int


class SessionCartData(CamelModel):
    has_cart: bool


class ApiResponse(CamelModel, Generic[T]):
    """Success envelope shared by all cart endpoints."""

    success: bool = True
    message: str
    data: T


class ErrorInfo(CamelModel):
    type: str
    details: Optional[Any] = None


class ErrorResponse(CamelModel):
    success: bool = False
    message: str
    error: ErrorInfo
