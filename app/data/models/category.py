from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.data.database import Base


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, unique=True)

    products = relationship("ProductModel", back_populates="category")
