# app/services/order_service.py
from dataclasses import dataclass
from decimal import Decimal
from datetime import date
from typing import Iterable, List, Sequence

from sqlalchemy.orm import Session

from app.data.models.order import OrderModel
from app.data.models.order_line import OrderLineModel
from app.domain.enums import OrderStatus
from app.domain.errors import ResourceNotFound
from app.repos.order_repo import OrderRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class OrderLineDraft:
    """Product snapshot plus quantity and price, as captured at checkout."""

    product_id: int | None
    product_name: str
    product_brand: str
    quantity: int
    unit_price: Decimal


def calculate_total(lines: Iterable[OrderLineDraft]) -> Decimal:
    return sum((line.unit_price * line.quantity for line in lines), Decimal("0.00"))


class OrderService:
    """
    Order store. Orders are immutable once created; create() only flushes
    so the order shares the caller's transaction.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)

    def create(self, user_id: int, lines: Sequence[OrderLineDraft]) -> OrderModel:
        order = OrderModel(
            user_id=user_id,
            order_date=date.today(),
            status=OrderStatus.PENDING.value,
            total_amount=calculate_total(lines),
            lines=[
                OrderLineModel(
                    product_id=line.product_id,
                    product_name=line.product_name,
                    product_brand=line.product_brand,
                    quantity=line.quantity,
                    price=line.unit_price,
                )
                for line in lines
            ],
        )
        created = self.repo.add_order(order)
        logger.info(f"Order {created.id} for user {user_id} staged, total {created.total_amount}")
        return created

    def get(self, order_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise ResourceNotFound(f"Order {order_id} not found")
        return order

    def list_for_user(self, user_id: int) -> List[OrderModel]:
        return self.repo.list_for_user(user_id)
