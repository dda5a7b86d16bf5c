# app/services/cart_service.py
from decimal import Decimal
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_line import CartLineModel
from app.domain.enums import Resolution
from app.domain.errors import ResourceNotFound
from app.repos.cart_repo import CartRepo
from app.repos.product_repo import ProductRepo
from app.repos.user_repo import UserRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart store: one cart per user, owning its lines.

    queries (get_cart, get_cart_by_user, get_total_price) only read;
    commands (add_line, remove_line, update_quantity, clear) commit their own transaction.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)

    # query
    def get_cart(self, cart_id: int) -> CartModel:
        cart = self.repo.get_cart(cart_id)
        if not cart:
            raise ResourceNotFound(f"Cart {cart_id} not found")
        return cart

    def get_cart_by_user(self, user_id: int) -> CartModel:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            raise ResourceNotFound(f"No cart found for user {user_id}")
        return cart

    def lock_cart_by_user(self, user_id: int) -> CartModel:
        cart = self.repo.get_cart_by_user_for_update(user_id)
        if not cart:
            raise ResourceNotFound(f"No cart found for user {user_id}")
        return cart

    def get_total_price(self, cart_id: int) -> Decimal:
        return self.get_cart(cart_id).total_amount

    # commands
    def get_or_create_cart(self, user_id: int) -> Tuple[CartModel, Resolution]:
        existing = self.repo.get_cart_by_user(user_id)
        if existing:
            return existing, Resolution.FOUND

        if not self.users.get_user(user_id):
            raise ResourceNotFound(f"User {user_id} not found")

        try:
            with self.repo.db.begin_nested():
                created = self.repo.create_cart(CartModel(user_id=user_id))
        except IntegrityError:
            # another request created this user's cart in the meantime
            existing = self.repo.get_cart_by_user(user_id)
            if not existing:
                raise
            logger.info(f"Cart {existing.id} for user {user_id} created concurrently, reusing it")
            return existing, Resolution.FOUND

        logger.info(f"Created cart {created.id} for user {user_id}")
        return created, Resolution.CREATED

    def add_line(self, user_id: int, product_id: int, quantity: int) -> Tuple[CartModel, Resolution]:
        """
        Add `quantity` of a product to the user's cart, creating the cart on first use.

        An existing line for the same product keeps its price snapshot and
        grows by `quantity`; a new line snapshots the product's current price.
        """
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        product = self.products.get_product(product_id)
        if not product:
            raise ResourceNotFound(f"Product {product_id} not found")

        try:
            cart, resolution = self.get_or_create_cart(user_id)

            line = self.repo.get_line_for_product(cart.id, product_id)
            if line:
                logger.info(
                    f"Product {product_id} already in cart {cart.id}, quantity "
                    f"{line.quantity} -> {line.quantity + quantity}"
                )
                line.quantity += quantity
            else:
                logger.info(f"Adding product {product_id} x{quantity} to cart {cart.id}")
                self.repo.add_line(
                    CartLineModel(
                        cart_id=cart.id,
                        product_id=product_id,
                        quantity=quantity,
                        unit_price=product.price,
                    )
                )
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise
        return cart, resolution

    def remove_line(self, cart_id: int, line_id: int) -> CartModel:
        cart = self.get_cart(cart_id)
        line = self.repo.get_line(cart_id, line_id)
        if not line:
            raise ResourceNotFound(f"Item {line_id} not found in cart {cart_id}")

        self.repo.delete_line(line)
        self.repo.commit()
        logger.info(f"Removed item {line_id} from cart {cart_id}")
        return cart

    def update_quantity(self, cart_id: int, line_id: int, quantity: int) -> CartModel:
        if quantity < 0:
            raise ValueError("Quantity must not be negative")

        cart = self.get_cart(cart_id)
        line = self.repo.get_line(cart_id, line_id)
        if not line:
            raise ResourceNotFound(f"Item {line_id} not found in cart {cart_id}")

        if quantity == 0:
            # a zero-quantity line is removed, never stored
            self.repo.delete_line(line)
            logger.info(f"Item {line_id} in cart {cart_id} set to 0, removed")
        else:
            line.quantity = quantity
            logger.info(f"Item {line_id} in cart {cart_id} quantity set to {quantity}")
        self.repo.commit()
        return cart

    def clear(self, cart_id: int) -> None:
        """Delete all lines, then the cart row. The cart must still exist."""
        cart = self.get_cart(cart_id)
        try:
            self.repo.delete_cart(cart)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise
        logger.info(f"Cart {cart_id} cleared")

    def release_lines(self, cart: CartModel) -> int:
        """Delete the cart's lines inside the caller's transaction; no commit."""
        return self.repo.delete_lines(cart)

    def discard_if_empty(self, cart_id: int) -> str:
        """
        Delete a cart left behind by a checkout, unless the user has started
        filling it again. Returns "cleared", "absent" or "in_use".
        """
        cart = self.repo.get_cart(cart_id)
        if not cart:
            return "absent"
        if cart.items:
            logger.info(f"Cart {cart_id} holds new items, leaving it in place")
            return "in_use"
        try:
            self.repo.delete_cart(cart)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise
        logger.info(f"Cart {cart_id} cleared")
        return "cleared"
