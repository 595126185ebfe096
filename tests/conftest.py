from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.database import Base
from app.config.settings import settings
from app.shared.database.models import Brand, Category, Product, Seller, User
from app.modules.products import ProductService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def without_transactions(monkeypatch):
    monkeypatch.setattr(settings, "use_transactions", False)


def _add(db, record):
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@pytest.fixture
def user(db):
    return _add(db, User(name="Ana", email="ana@example.com"))


@pytest.fixture
def other_user(db):
    return _add(db, User(name="Luis", email="luis@example.com"))


@pytest.fixture
def seller(db, user):
    return _add(db, Seller(name="Vivero Central", user_id=user.id))


@pytest.fixture
def category(db, user):
    return _add(db, Category(name="Rosas", user_id=user.id))


@pytest.fixture
def brand(db, user):
    return _add(db, Brand(name="Flores del Sur", user_id=user.id))


@pytest.fixture
def make_product(db, user, seller):
    """Crear productos a través del servicio (genera la compra inicial)"""
    service = ProductService(db)

    def _make(name="Rosa roja", price="2.50", stock=10, owner=None, **extra) -> Product:
        payload = {
            "name": name,
            "price": Decimal(price),
            "stock": stock,
            "seller_id": seller.id,
        }
        payload.update(extra)
        return service.create(payload, (owner or user).id)

    return _make


@pytest.fixture
def sale_payload():
    def _payload(product, quantity=1, price=None, buyer="Carla", when=datetime(2024, 3, 15, 10, 30)):
        return {
            "product_id": product.id,
            "product_price": Decimal(price) if price else product.price,
            "quantity": quantity,
            "buyer_name": buyer,
            "date": when,
        }

    return _payload
