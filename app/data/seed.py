# app/data/seed.py
from decimal import Decimal

from app.data.database import SessionLocal, init_db
from app.data.models.product import ProductModel
from app.data.models.user import UserModel
from app.domain.schemas import ProductCreate
from app.services.product_service import ProductService
from app.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PRODUCTS = [
    ProductCreate(name="Keyboard", brand="Keychron", category="Peripherals", price=Decimal("199.99"), inventory=25),
    ProductCreate(name="Mouse", brand="Logitech", category="Peripherals", price=Decimal("49.50"), inventory=40),
    ProductCreate(name="Monitor", brand="Dell", category="Displays", price=Decimal("899.00"), inventory=5),
]


def seed():
    init_db()
    db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(ProductModel).first():
            logger.info("Database already seeded")
            return

        db.add(UserModel(id=1, name="Demo User", email="demo@example.com"))
        db.commit()

        svc = ProductService(db)
        for payload in DEMO_PRODUCTS:
            product, resolution = svc.add_product(payload)
            logger.info(f"Seeded product {product.id} ({product.name}), category {resolution.value}")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
