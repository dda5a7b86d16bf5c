#app/data/models/product.py
from sqlalchemy import Column, Integer, ForeignKey, String, Numeric, CheckConstraint
from sqlalchemy.orm import relationship

from app.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    brand = Column(String, nullable=False)
    description = Column(String, nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)

    price = Column(Numeric(10, 2), nullable=False)
    inventory = Column(Integer, nullable=False, default=0)

    category = relationship("CategoryModel", back_populates="products")

    __table_args__ = (CheckConstraint("inventory >= 0", name="ck_product_inventory_non_negative"),)
