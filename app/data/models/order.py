from sqlalchemy import Column, Integer, ForeignKey, String, Date, DateTime, Numeric
from sqlalchemy.orm import relationship
from datetime import date, datetime, timezone

from app.data.database import Base
from app.domain.enums import OrderStatus

class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    order_date = Column(Date, nullable=False, default=date.today)
    status = Column(String, nullable=False, default=OrderStatus.PENDING.value)
    total_amount = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    lines = relationship(
        "OrderLineModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLineModel.id",
    )
