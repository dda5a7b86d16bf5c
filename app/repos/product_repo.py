# app/repos/product_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.data.models.category import CategoryModel
from app.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_product_for_update(self, product_id: int) -> ProductModel | None:
        # SELECT ... FOR UPDATE; a no-op on SQLite, where BEGIN IMMEDIATE already serialises writers
        return self.db.execute(
            select(ProductModel)
            .where(ProductModel.id == product_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def decrement_inventory(self, product_id: int, quantity: int) -> int:
        """Guarded decrement; returns the number of rows changed (0 or 1)."""
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.inventory >= quantity)
            .values(inventory=ProductModel.inventory - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product


class CategoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_name(self, name: str) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel).where(CategoryModel.name == name)
        ).scalar_one_or_none()

    def add_category(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        self.db.flush()
        return category
