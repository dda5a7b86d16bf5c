from datetime import date
from decimal import Decimal

import pytest

from app.domain.enums import OrderStatus
from app.domain.errors import ResourceNotFound
from app.services.order_service import OrderLineDraft, OrderService, calculate_total


def draft(name, quantity, price, brand="Acme"):
    return OrderLineDraft(
        product_id=None,
        product_name=name,
        product_brand=brand,
        quantity=quantity,
        unit_price=Decimal(price),
    )


def test_calculate_total_is_exact():
    lines = [draft("a", 3, "0.10"), draft("b", 1, "0.20")]

    assert calculate_total(lines) == Decimal("0.50")


def test_calculate_total_of_nothing():
    assert calculate_total([]) == Decimal("0.00")


class TestCreate:
    def test_creates_pending_order_with_lines(self, db, make_user):
        user_id = make_user()
        svc = OrderService(db)

        order = svc.create(user_id, [draft("Pen", 3, "1.25"), draft("Pad", 1, "4.00", brand="Moleskine")])
        db.commit()

        assert order.status == OrderStatus.PENDING.value
        assert order.order_date == date.today()
        assert order.total_amount == Decimal("7.75")
        assert [(l.product_name, l.product_brand, l.quantity, l.price) for l in order.lines] == [
            ("Pen", "Acme", 3, Decimal("1.25")),
            ("Pad", "Moleskine", 1, Decimal("4.00")),
        ]

    def test_nothing_is_committed_by_create(self, db, make_user):
        user_id = make_user()
        svc = OrderService(db)

        svc.create(user_id, [draft("Pen", 1, "1.00")])
        db.rollback()

        assert svc.list_for_user(user_id) == []


class TestQueries:
    def test_get_missing(self, db):
        with pytest.raises(ResourceNotFound):
            OrderService(db).get(123)

    def test_list_for_user_without_orders(self, db, make_user):
        assert OrderService(db).list_for_user(make_user()) == []

    def test_list_for_user_only_returns_own_orders(self, db, make_user):
        alice = make_user(1, "Alice")
        bob = make_user(2, "Bob")
        svc = OrderService(db)
        first = svc.create(alice, [draft("Pen", 1, "1.00")])
        svc.create(bob, [draft("Pad", 1, "2.00")])
        second = svc.create(alice, [draft("Ink", 2, "3.00")])
        db.commit()

        assert [o.id for o in svc.list_for_user(alice)] == [first.id, second.id]
