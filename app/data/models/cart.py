#app/data/models/cart.py
from decimal import Decimal

from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship

from app.data.database import Base


class CartModel(Base):
    __tablename__ = "carts"

    # store-assigned, never generated in process
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)

    # ids of cleared carts are never reused
    __table_args__ = {"sqlite_autoincrement": True}

    items = relationship(
        "CartLineModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartLineModel.id",
    )

    @property
    def total_amount(self) -> Decimal:
        return sum((i.unit_price * i.quantity for i in self.items), Decimal("0.00"))
