# storefront_cart/services/unit_of_work.py
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront_cart.domain.errors import CartError, DatabaseError
from storefront_cart.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def unit_of_work(db: Session, failure_message: str):
    """
    Commit once on success, roll back on any failure.
    Cart errors pass through unchanged; store failures become DatabaseError.
    """
    try:
        yield
        db.commit()
    except CartError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{failure_message}: {e}")
        raise DatabaseError(failure_message) from e
