# app/domain/errors.py
"""
Domain errors raised by the stores and the checkout.

Routers map them onto HTTP status codes; nothing here knows about HTTP.
"""


class ShopError(Exception):
    """Base class for every domain error."""


class ResourceNotFound(ShopError):
    pass


class InsufficientInventory(ShopError):
    def __init__(self, product_id: int, requested: int, available: int):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient inventory for product {product_id}: "
            f"requested {requested}, available {available}"
        )


class EmptyCart(ShopError):
    pass


class PersistenceFailure(ShopError):
    pass


class PostCommitCleanupFailed(ShopError):
    """The order was committed but its cart could not be cleared."""

    def __init__(self, order_id: int, cart_id: int, reason: str):
        self.order_id = order_id
        self.cart_id = cart_id
        self.reason = reason
        super().__init__(
            f"Order {order_id} placed but cart {cart_id} was not cleared: {reason}"
        )
