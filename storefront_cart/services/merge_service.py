# storefront_cart/services/merge_service.py
from sqlalchemy.orm import Session

from storefront_cart.domain.identifiers import Owner, OwnerKind
from storefront_cart.repos.cart_repo import CartRepo
from storefront_cart.services.unit_of_work import unit_of_work
from storefront_cart.utils.clock import utc_now
from storefront_cart.utils.logging import get_logger

logger = get_logger(__name__)


def _as(kind: OwnerKind, value: Owner | str) -> Owner:
    if isinstance(value, Owner):
        return value
    return Owner(kind=kind, value=value)


class CartMergeService:
    """Moves a guest session's cart into the user's cart at login."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CartRepo(db)

    def claim_guest_cart(self, guest: Owner | str, user: Owner | str) -> None:
        """
        Overlapping products sum their quantities on the user's line (no stock
        re-check), the rest are re-parented onto the user's cart, and the guest
        cart is deleted. All or nothing; a missing guest cart is a no-op.
        """
        guest = _as(OwnerKind.SESSION, guest)
        user = _as(OwnerKind.USER, user)
        if guest == user:
            return

        with unit_of_work(self.db, "Failed to claim guest cart"):
            guest_cart = self.repo.get_cart_by_owner(guest)
            if not guest_cart:
                return

            guest_items = self.repo.get_cart_items(guest_cart.id)
            if not guest_items:
                self.repo.delete_cart(guest_cart)
                return

            user_cart = self.repo.get_cart_by_owner(user)
            if user_cart is None:
                user_cart = self.repo.create_cart(user)

            user_items = {i.product_id: i for i in self.repo.get_cart_items(user_cart.id)}

            now = utc_now()
            moved = summed = 0
            for guest_item in guest_items:
                existing = user_items.get(guest_item.product_id)
                if existing:
                    existing.quantity += guest_item.quantity
                    existing.updated_at = now
                    self.db.delete(guest_item)
                    summed += 1
                else:
                    guest_item.cart = user_cart
                    guest_item.updated_at = now
                    moved += 1

            self.repo.delete_cart(guest_cart)
            self.repo.touch_cart(user_cart)

            logger.info(
                f"Claimed guest cart {guest_cart.id} into {user_cart.id}: "
                f"{moved} moved, {summed} merged"
            )
