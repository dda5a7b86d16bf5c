# app/services/product_service.py
from typing import Tuple

from sqlalchemy.orm import Session

from app.data.models.category import CategoryModel
from app.data.models.product import ProductModel
from app.domain.enums import Resolution
from app.domain.errors import ResourceNotFound
from app.domain.schemas import ProductCreate
from app.repos.product_repo import CategoryRepo, ProductRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepo(db)
        self.categories = CategoryRepo(db)

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise ResourceNotFound(f"Product {product_id} not found")
        return product

    def get_or_create_category(self, name: str) -> Tuple[CategoryModel, Resolution]:
        existing = self.categories.get_by_name(name)
        if existing:
            return existing, Resolution.FOUND

        created = self.categories.add_category(CategoryModel(name=name))
        logger.info(f"Created category {name!r}")
        return created, Resolution.CREATED

    def add_product(self, payload: ProductCreate) -> Tuple[ProductModel, Resolution]:
        try:
            category, resolution = self.get_or_create_category(payload.category)
            product = self.repo.add_product(
                ProductModel(
                    name=payload.name,
                    brand=payload.brand,
                    description=payload.description,
                    category=category,
                    price=payload.price,
                    inventory=payload.inventory,
                )
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Added product {product.id} ({product.name}) to category {category.name!r}")
        return product, resolution
