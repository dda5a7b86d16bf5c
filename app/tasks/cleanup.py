# app/tasks/cleanup.py
from sqlalchemy.exc import SQLAlchemyError

from app.celery_worker import celery_app
from app.data.database import SessionLocal
from app.services.cart_service import CartService
from app.utils.logging import get_logger
from app.utils.settings import CART_CLEAR_TASK_MAX_RETRIES

logger = get_logger(__name__)


@celery_app.task(
    name="app.tasks.cleanup.clear_cart_task",
    autoretry_for=(SQLAlchemyError,),
    retry_backoff=True,
    retry_backoff_max=300,
    max_retries=CART_CLEAR_TASK_MAX_RETRIES,
)
def clear_cart_task(cart_id: int) -> dict:
    """
    Finish the cart clear of a checkout whose order already committed.

    The checkout deleted the cart's lines with the order, so only the empty
    row is left. A cart the user has filled again is kept.
    """
    logger.info(f"Reconciling cart {cart_id} after checkout")

    db = SessionLocal()
    try:
        status = CartService(db).discard_if_empty(cart_id)
    finally:
        db.close()

    logger.info(f"Reconciliation of cart {cart_id} finished: {status}")
    return {"cart_id": cart_id, "status": status}
