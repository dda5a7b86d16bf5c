import os

# must be set before any app module reads settings
os.environ.setdefault("DATABASE_URL", "sqlite:///./shop-test.db")
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "true")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.data import models  # noqa: F401
from app.data.database import Base, get_db, make_engine, make_session_factory
from app.data.models.category import CategoryModel
from app.data.models.product import ProductModel
from app.data.models.user import UserModel
from app.main import create_app
from app.services.cart_service import CartService


@pytest.fixture()
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'shop.db'}", echo=False)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def make_user(db):
    def _make(user_id=1, name="Alice"):
        user = UserModel(id=user_id, name=name, email=f"user{user_id}@example.com")
        db.add(user)
        db.commit()
        return user_id

    return _make


@pytest.fixture()
def make_product(db):
    def _make(name="Widget", brand="Acme", price="9.99", inventory=5, category="General"):
        cat = db.query(CategoryModel).filter_by(name=category).one_or_none()
        if cat is None:
            cat = CategoryModel(name=category)
            db.add(cat)
        product = ProductModel(
            name=name,
            brand=brand,
            description=f"{brand} {name}",
            category=cat,
            price=Decimal(price),
            inventory=inventory,
        )
        db.add(product)
        db.flush()
        product_id = product.id
        db.commit()
        return product_id

    return _make


@pytest.fixture()
def fill_cart(db):
    def _fill(user_id, *lines):
        svc = CartService(db)
        cart = None
        for product_id, quantity in lines:
            cart, _ = svc.add_line(user_id, product_id, quantity)
        cart_id = cart.id
        # end the read transaction so other sessions can write
        db.commit()
        return cart_id

    return _fill


@pytest.fixture()
def client(engine, session_factory, monkeypatch):
    # startup creates the schema on the per-test engine
    monkeypatch.setattr("app.main.engine", engine)
    application = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_db] = override_get_db
    with TestClient(application) as client:
        yield client
