# storefront_cart/api/routers/carts.py
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront_cart.api.deps import (
    get_owner,
    get_session_id,
    get_user_id,
    read_session_cookie,
    set_session_cookie,
)
from storefront_cart.data.database import get_db
from storefront_cart.domain.errors import AuthorizationError, ValidationError
from storefront_cart.domain.identifiers import Owner, is_user_id, is_valid_identifier
from storefront_cart.domain.schemas import (
    AddItemIn,
    ApiResponse,
    CartData,
    ClaimCartIn,
    MutationData,
    SessionCartData,
    UpdateQuantityIn,
    ValidateCartIn,
    ValidationResult,
)
from storefront_cart.services.cart_service import CartService
from storefront_cart.services.merge_service import CartMergeService
from storefront_cart.services.validation_service import CartValidator
from storefront_cart.utils.cart_totals import calculate_cart_total, get_total_item_count
from storefront_cart.utils.clock import to_epoch_millis, utc_now

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


def _now_millis() -> int:
    return to_epoch_millis(utc_now())


def _mutation(message: str) -> ApiResponse[MutationData]:
    return ApiResponse[MutationData](message=message, data=MutationData(last_updated=_now_millis()))


def _remember_guest(response: Response, owner: Owner) -> None:
    if not owner.is_user:
        set_session_cookie(response, owner.value)


@router.get("", response_model=ApiResponse[CartData])
def get_cart(
    response: Response,
    owner: Owner = Depends(get_owner),
    db: Session = Depends(get_db),
):
    items = get_service(db).get_cart(owner)
    _remember_guest(response, owner)
    return ApiResponse[CartData](
        message="Cart loaded successfully",
        data=CartData(
            items=items,
            total=calculate_cart_total(items),
            item_count=get_total_item_count(items),
            last_updated=_now_millis(),
            session_id=None if owner.is_user else owner.value,
        ),
    )


@router.post("", response_model=ApiResponse[MutationData], status_code=201)
def add_item(
    payload: AddItemIn,
    response: Response,
    owner: Owner = Depends(get_owner),
    db: Session = Depends(get_db),
):
    get_service(db).add_item(owner, payload.product, payload.quantity)
    _remember_guest(response, owner)
    return _mutation("Item added to cart")


@router.delete("", response_model=ApiResponse[MutationData])
def clear_cart(owner: Owner = Depends(get_owner), db: Session = Depends(get_db)):
    get_service(db).clear_cart(owner)
    return _mutation("Cart cleared successfully")


@router.post("/claim", response_model=ApiResponse[MutationData])
def claim_cart(
    payload: ClaimCartIn,
    user_id: Optional[str] = Depends(get_user_id),
    session_id: Optional[str] = Depends(read_session_cookie),
    db: Session = Depends(get_db),
):
    """Merge the guest cart into the logged-in user's cart."""
    if not user_id:
        raise AuthorizationError("Must be authenticated to claim cart")

    guest_id = payload.guest_id or session_id
    if not guest_id:
        raise ValidationError("Guest ID required")
    if not is_valid_identifier(guest_id) or is_user_id(guest_id):
        raise ValidationError("Invalid guest ID")

    CartMergeService(db).claim_guest_cart(Owner.session(guest_id), Owner.user(user_id))
    return _mutation("Cart claimed successfully")


@router.post("/validate", response_model=ApiResponse[ValidationResult])
def validate_cart(payload: ValidateCartIn, db: Session = Depends(get_db)):
    result = CartValidator(db).validate_cart(payload.items)
    return ApiResponse[ValidationResult](message="Cart validated successfully", data=result)


@router.get("/session", response_model=ApiResponse[SessionCartData])
def session_cart(session_id: str = Depends(get_session_id), db: Session = Depends(get_db)):
    has_cart = get_service(db).has_session_cart(session_id)
    return ApiResponse[SessionCartData](
        message="Session checked",
        data=SessionCartData(has_cart=has_cart),
    )


@router.patch("/{item_id}", response_model=ApiResponse[MutationData])
def update_quantity(
    item_id: str,
    payload: UpdateQuantityIn,
    owner: Owner = Depends(get_owner),
    db: Session = Depends(get_db),
):
    get_service(db).update_quantity(owner, item_id, payload.quantity)
    return _mutation("Quantity updated")


@router.delete("/{item_id}", response_model=ApiResponse[MutationData])
def remove_item(
    item_id: str,
    owner: Owner = Depends(get_owner),
    db: Session = Depends(get_db),
):
    get_service(db).remove_item(owner, item_id)
    return _mutation("Item removed from cart")
