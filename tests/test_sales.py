from datetime import datetime
from decimal import Decimal

import pytest
from fastapi import HTTPException
from sqlalchemy.orm import sessionmaker

from app.shared.database.models import Product, Sale
from app.modules.sales import SalesService
from app.modules.sales.schemas import SaleCreateRequest, SaleResponse


@pytest.fixture
def service(db):
    return SalesService(db)


def _stock(db, product_id):
    db.expire_all()
    return db.get(Product, product_id).stock


def test_create_sale_decrements_stock(db, service, make_product, user):
    product = make_product(price="2.50", stock=10)
    payload = SaleCreateRequest(
        product_id=product.id,
        product_price=Decimal("2.50"),
        quantity=3,
        buyer_name="  Carla  ",
        date=datetime(2024, 3, 15, 10, 30)
    )

    sale = service.create(payload, user.id)

    assert sale.user_id == user.id
    assert sale.product_name == "Rosa roja"
    assert sale.buyer_name == "Carla"
    assert sale.total_price == Decimal("7.50")
    assert _stock(db, product.id) == 7


def test_create_sale_uses_charged_price(service, make_product, sale_payload, user):
    product = make_product(price="2.50", stock=10)

    sale = service.create(sale_payload(product, quantity=4, price="2.00"), user.id)

    assert sale.product_price == Decimal("2.00")
    assert sale.total_price == Decimal("8.00")


def test_create_sale_more_than_stock_is_rejected(db, service, make_product, sale_payload, user):
    product = make_product(stock=2)

    with pytest.raises(HTTPException) as exc:
        service.create(sale_payload(product, quantity=3), user.id)

    assert exc.value.status_code == 400
    assert exc.value.detail == "3 products are not available in stock!"
    assert _stock(db, product.id) == 2
    assert db.query(Sale).count() == 0


def test_create_sale_can_sell_whole_stock(db, service, make_product, sale_payload, user):
    product = make_product(stock=2)

    service.create(sale_payload(product, quantity=2), user.id)

    assert _stock(db, product.id) == 0


def test_create_sale_unknown_product(service, user):
    with pytest.raises(HTTPException) as exc:
        service.create(
            {"product_id": 9999, "product_price": Decimal("1"), "quantity": 1, "buyer_name": "X"},
            user.id
        )

    assert exc.value.detail == "Product not found"


def test_create_sale_rejects_non_positive_quantity(service, make_product, sale_payload, user):
    product = make_product()

    with pytest.raises(HTTPException) as exc:
        service.create(sale_payload(product, quantity=0), user.id)

    assert exc.value.status_code == 400


def test_create_sale_stock_taken_meanwhile(db, engine, service, make_product, sale_payload, user):
    product = make_product(stock=5)
    assert db.get(Product, product.id).stock == 5

    # otra sesión vende casi todo después de que esta cargó el producto
    other = sessionmaker(bind=engine)()
    other.query(Product).filter(Product.id == product.id).update({Product.stock: 1})
    other.commit()
    other.close()

    with pytest.raises(HTTPException) as exc:
        service.create(sale_payload(product, quantity=3), user.id)

    assert exc.value.detail == "Sale create failed: 3 products are not available in stock!"
    assert _stock(db, product.id) == 1
    assert db.query(Sale).count() == 0


def test_create_sale_of_other_users_product_is_rejected(db, service, make_product, sale_payload, user, other_user):
    product = make_product(stock=5, owner=other_user)

    with pytest.raises(HTTPException) as exc:
        service.create(sale_payload(product, quantity=1), user.id)

    assert exc.value.detail == "Product not found"
    assert _stock(db, product.id) == 5


def test_create_sale_rolls_back_stock_when_insert_fails(db, service, make_product, sale_payload, user, monkeypatch):
    product = make_product(stock=5)

    def broken_sale(sale_data):
        raise RuntimeError("insert failed")

    monkeypatch.setattr(service.repository, "create_sale", broken_sale)

    with pytest.raises(HTTPException) as exc:
        service.create(sale_payload(product, quantity=2), user.id)

    assert exc.value.detail == "Sale create failed: insert failed"
    assert _stock(db, product.id) == 5


def test_create_sale_without_transactions_keeps_stock_decrement(
    db, service, make_product, sale_payload, user, monkeypatch, without_transactions
):
    product = make_product(stock=5)

    def broken_sale(sale_data):
        raise RuntimeError("insert failed")

    monkeypatch.setattr(service.repository, "create_sale", broken_sale)

    with pytest.raises(HTTPException):
        service.create(sale_payload(product, quantity=2), user.id)

    assert _stock(db, product.id) == 3


def test_read_all_searches_product_and_buyer(service, make_product, sale_payload, user):
    rose = make_product(name="Rosa", stock=10)
    lily = make_product(name="Lirio", stock=10)
    service.create(sale_payload(rose, buyer="Carla"), user.id)
    service.create(sale_payload(lily, buyer="Rosalía"), user.id)
    service.create(sale_payload(lily, buyer="Pedro"), user.id)

    result = service.read_all({"search": "ros"}, user.id)

    assert {s.buyer_name for s in result["data"]} == {"Carla", "Rosalía"}
    # el total no aplica la búsqueda
    assert result["total_count"] == 3


def test_read_sale_with_product(service, make_product, sale_payload, user, other_user):
    product = make_product()
    sale = service.create(sale_payload(product, quantity=2), user.id)

    found = service.read(sale.id, user.id)
    response = SaleResponse.model_validate(found)

    assert response.product.name == "Rosa roja"
    assert response.product.stock == 8
    assert service.read(sale.id, other_user.id) is None

    with pytest.raises(HTTPException) as exc:
        service.read(9999, user.id)
    assert exc.value.status_code == 404


# ==================== REPORTES ====================

@pytest.fixture
def sales_history(service, make_product, sale_payload, user, other_user):
    product = make_product(price="10.00", stock=100)
    foreign = make_product(name="Ajeno", price="10.00", stock=100, owner=other_user)

    for when, quantity in (
        (datetime(2020, 12, 31, 9, 0), 1),
        (datetime(2021, 1, 1, 18, 0), 2),
        (datetime(2021, 1, 1, 19, 0), 1),
        (datetime(2021, 1, 4, 12, 0), 3),
        (datetime(2021, 2, 10, 12, 0), 4),
    ):
        service.create(sale_payload(product, quantity=quantity, when=when), user.id)

    # sin fecha: fuera de los reportes
    service.create(sale_payload(product, quantity=5, when=None), user.id)
    # de otro usuario
    service.create(sale_payload(foreign, quantity=9, when=datetime(2021, 1, 4)), other_user.id)


@pytest.mark.usefixtures("sales_history")
def test_daily_rollup(service, user):
    rows = [(r.year, r.month, r.day, r.total_quantity, r.total_revenue) for r in service.read_all_daily(user.id)]

    assert rows == [
        (2020, 12, 31, 1, 10.0),
        (2021, 1, 1, 3, 30.0),
        (2021, 1, 4, 3, 30.0),
        (2021, 2, 10, 4, 40.0),
    ]


@pytest.mark.usefixtures("sales_history")
def test_weekly_rollup_uses_iso_weeks(service, user):
    rows = [(r.year, r.week, r.total_quantity, r.total_revenue) for r in service.read_all_weeks(user.id)]

    # 2020-12-31 y 2021-01-01 caen en la semana ISO 53 de 2020
    assert rows == [
        (2020, 53, 4, 40.0),
        (2021, 1, 3, 30.0),
        (2021, 6, 4, 40.0),
    ]


@pytest.mark.usefixtures("sales_history")
def test_monthly_rollup(service, user):
    rows = [(r.year, r.month, r.total_quantity, r.total_revenue) for r in service.read_all_months(user.id)]

    assert rows == [
        (2020, 12, 1, 10.0),
        (2021, 1, 6, 60.0),
        (2021, 2, 4, 40.0),
    ]


@pytest.mark.usefixtures("sales_history")
def test_yearly_rollup(service, user, other_user):
    rows = [(r.year, r.total_quantity, r.total_revenue) for r in service.read_all_yearly(user.id)]

    assert rows == [(2020, 1, 10.0), (2021, 10, 100.0)]
    assert [(r.year, r.total_quantity) for r in service.read_all_yearly(other_user.id)] == [(2021, 9)]


def test_rollups_without_sales(service, user):
    assert service.read_all_daily(user.id) == []
    assert service.read_all_weeks(user.id) == []
    assert service.read_all_months(user.id) == []
    assert service.read_all_yearly(user.id) == []
