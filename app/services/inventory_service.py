# app/services/inventory_service.py
from sqlalchemy.orm import Session

from app.data.models.product import ProductModel
from app.domain.errors import InsufficientInventory, ResourceNotFound
from app.repos.product_repo import ProductRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class InventoryLedger:
    """
    Owns product stock counts.

    decrement() never commits: the change becomes durable only when the
    enclosing transaction (the checkout) commits, and is undone by its rollback.
    Inventory never goes below zero.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepo(db)

    def get_stock(self, product_id: int) -> int:
        product = self.repo.get_product(product_id)
        if not product:
            raise ResourceNotFound(f"Product {product_id} not found")
        return product.inventory

    def decrement(self, product_id: int, quantity: int) -> ProductModel:
        """
        Lock the product row, check the floor and subtract `quantity`.

        Returns the product with its updated inventory.
        """
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        product = self.repo.get_product_for_update(product_id)
        if not product:
            raise ResourceNotFound(f"Product {product_id} not found")

        if product.inventory < quantity:
            logger.warning(
                f"Insufficient inventory for product {product_id}: "
                f"requested {quantity}, available {product.inventory}"
            )
            raise InsufficientInventory(product_id, quantity, product.inventory)

        # guarded update: a concurrent writer that slipped past the row lock
        # still cannot take the count below zero
        if self.repo.decrement_inventory(product_id, quantity) == 0:
            self.db.refresh(product)
            raise InsufficientInventory(product_id, quantity, product.inventory)

        self.db.refresh(product)
        logger.info(f"Product {product_id} inventory decremented by {quantity}, now {product.inventory}")
        return product
