# storefront_cart/data/seed.py
import json

from sqlalchemy.orm import Session

from storefront_cart.data.database import SessionLocal, init_db
from storefront_cart.data.models.product import ProductGroupModel, ProductModel
from storefront_cart.repos.product_repo import ProductRepo
from storefront_cart.utils.logging import get_logger

logger = get_logger(__name__)

CATALOG = [
    {
        "name": "Mechanical Keyboard",
        "slug": "mechanical-keyboard",
        "category": "Peripherals",
        "brand": "Keyton",
        "images": [
            {"url": "https://cdn.example.com/keyboard-side.jpg", "isThumbnail": False},
            {"url": "https://cdn.example.com/keyboard-top.jpg", "isThumbnail": True},
        ],
        "variants": [
            {"sku": "KB-87-BLACK", "name": "Mechanical Keyboard Black", "price": 19999, "stock": 25},
            {"sku": "KB-87-WHITE", "name": "Mechanical Keyboard White", "price": 19999, "stock": 10},
        ],
    },
    {
        "name": "Wireless Mouse",
        "slug": "wireless-mouse",
        "category": "Peripherals",
        "brand": "Keyton",
        "images": [{"url": "https://cdn.example.com/mouse.jpg", "isThumbnail": False}],
        "variants": [
            {"sku": "MS-W-GRAPHITE", "name": "Wireless Mouse Graphite", "price": 4950, "stock": 40},
        ],
    },
    {
        "name": "27in Monitor",
        "slug": "27in-monitor",
        "category": "Displays",
        "brand": "Viewline",
        "images": [],
        "variants": [
            {"sku": "MN-27-QHD", "name": "27in Monitor QHD", "price": 89900, "stock": 5},
        ],
    },
]


def seed(db: Session | None = None) -> int:
    """Insert the demo catalog when no products exist. Returns products created."""
    own_session = db is None
    db = db or SessionLocal()
    try:
        repo = ProductRepo(db)
        # not forcing: only seed if empty
        if repo.has_products():
            return 0

        created = 0
        for entry in CATALOG:
            group = ProductGroupModel(
                name=entry["name"],
                slug=entry["slug"],
                category=entry["category"],
                brand=entry["brand"],
                images=json.dumps(entry["images"]),
            )
            for variant in entry["variants"]:
                group.products.append(ProductModel(**variant))
                created += 1
            repo.add_group(group)

        db.commit()
        logger.info(f"Seeded {created} products")
        return created
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    init_db()
    seed()
