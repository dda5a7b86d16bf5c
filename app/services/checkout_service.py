# app/services/checkout_service.py
from dataclasses import dataclass
from typing import Callable, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel
from app.domain.checkout_state import CheckoutAttempt, CheckoutState
from app.domain.errors import (
    EmptyCart,
    InsufficientInventory,
    PersistenceFailure,
    PostCommitCleanupFailed,
    ResourceNotFound,
)
from app.services.cart_service import CartService
from app.services.inventory_service import InventoryLedger
from app.services.order_service import OrderLineDraft, OrderService
from app.utils.logging import get_logger
from app.utils.retry import db_retry
from app.utils.settings import CART_CLEAR_ATTEMPTS

logger = get_logger(__name__)


def schedule_cart_cleanup(cart_id: int) -> None:
    # imported lazily so the service does not need a broker to be importable
    from app.tasks.cleanup import clear_cart_task

    clear_cart_task.delay(cart_id)


@dataclass
class CheckoutResult:
    order: OrderModel
    attempt: CheckoutAttempt
    cleanup_error: PostCommitCleanupFailed | None = None

    @property
    def warnings(self) -> List[str]:
        return [str(self.cleanup_error)] if self.cleanup_error else []


class CheckoutService:
    """
    Turns a user's cart into a PENDING order.

    Loading the cart, decrementing inventory and persisting the order run in
    one transaction on `db`; any failure there rolls back every decrement.
    The cart lines are deleted in that same transaction; only dropping the
    emptied cart row happens after the commit, and that step can only degrade
    the result, never undo the order.
    """

    def __init__(
        self,
        db: Session,
        cleanup_scheduler: Callable[[int], None] = schedule_cart_cleanup,
        clear_attempts: int = CART_CLEAR_ATTEMPTS,
    ):
        self.db = db
        self.carts = CartService(db)
        self.inventory = InventoryLedger(db)
        self.orders = OrderService(db)
        self.cleanup_scheduler = cleanup_scheduler
        self.clear_attempts = clear_attempts

    def checkout(self, user_id: int) -> CheckoutResult:
        attempt = CheckoutAttempt(user_id)

        try:
            cart = self.carts.lock_cart_by_user(user_id)
            cart_id = cart.id
            lines = list(cart.items)
            if not lines:
                raise EmptyCart(f"Cart {cart_id} is empty")
            attempt.advance(CheckoutState.CART_LOADED)

            drafts = []
            # fixed lock order across concurrent checkouts
            for line in sorted(lines, key=lambda item: item.product_id):
                product = self.inventory.decrement(line.product_id, line.quantity)
                drafts.append(
                    OrderLineDraft(
                        product_id=product.id,
                        product_name=product.name,
                        product_brand=product.brand,
                        quantity=line.quantity,
                        unit_price=line.unit_price,
                    )
                )
            attempt.advance(CheckoutState.INVENTORY_RESERVED)

            order = self.orders.create(user_id, drafts)
            # lines go with the order so a retried checkout finds the cart empty
            self.carts.release_lines(cart)
            self.db.commit()
            attempt.advance(CheckoutState.ORDER_PERSISTED)
        except (ResourceNotFound, InsufficientInventory, EmptyCart) as e:
            self.db.rollback()
            attempt.fail(type(e).__name__)
            logger.warning(f"Checkout for user {user_id} rejected: {e}")
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            attempt.fail(PersistenceFailure.__name__)
            logger.error(f"Checkout for user {user_id} rolled back: {e}")
            raise PersistenceFailure(f"Could not place order for user {user_id}") from e

        logger.info(f"Order {order.id} committed for user {user_id}, total {order.total_amount}")

        cleanup_error = self._clear_cart(order, cart_id)
        if cleanup_error is None:
            attempt.advance(CheckoutState.CART_CLEARED)
        attempt.advance(CheckoutState.DONE)

        return CheckoutResult(order=order, attempt=attempt, cleanup_error=cleanup_error)

    def _clear_cart(self, order: OrderModel, cart_id: int) -> PostCommitCleanupFailed | None:
        order_id = order.id
        try:
            db_retry(self.clear_attempts)(self.carts.clear)(cart_id)
            return None
        except (SQLAlchemyError, ResourceNotFound) as e:
            self.db.rollback()
            error = PostCommitCleanupFailed(order_id, cart_id, str(e))
            logger.warning(str(error))

        try:
            self.cleanup_scheduler(cart_id)
            logger.info(f"Scheduled background clear of cart {cart_id} for order {order_id}")
        except Exception as e:
            logger.error(f"Could not schedule clear of cart {cart_id} for order {order_id}: {e}")
        return error
