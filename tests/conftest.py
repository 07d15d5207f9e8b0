import json
import os
import uuid

# must be set before storefront_cart builds its engine
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from storefront_cart.data.database import Base, build_engine, get_db
import storefront_cart.data.models  # noqa: F401
from storefront_cart.data.models.product import ProductGroupModel, ProductModel
from storefront_cart.domain.identifiers import Owner
from storefront_cart.domain.schemas import ProductData
from storefront_cart.main import create_app


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_product(db):
    """Create a committed product (and its group) in the catalog."""

    def _make(stock=10, price=1000, is_active=True, images=None, name=None):
        tag = uuid.uuid4().hex[:8]
        group = ProductGroupModel(
            name=f"Group {tag}",
            slug=f"group-{tag}",
            category="Test",
            brand="Test Brand",
            images=json.dumps(images) if images is not None else None,
        )
        product = ProductModel(
            sku=f"SKU-{tag}",
            name=name or f"Product {tag}",
            price=price,
            stock=stock,
            is_active=is_active,
        )
        group.products.append(product)
        db.add(group)
        db.commit()
        return product

    return _make


@pytest.fixture
def product_data():
    """Build the add-to-cart payload for a catalog product."""

    def _build(product: ProductModel, **selections) -> ProductData:
        return ProductData(
            product_id=product.id,
            product_group_id=product.product_group_id,
            name=product.name,
            sku=product.sku,
            price=product.price,
            stock=product.stock,
            variant_selections=selections,
        )

    return _build


@pytest.fixture
def user_owner():
    return Owner.user(str(uuid.uuid4()))


@pytest.fixture
def guest_owner():
    return Owner.session("guest-" + uuid.uuid4().hex)


@pytest.fixture
def client(session_factory):
    app = create_app(init_database=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
