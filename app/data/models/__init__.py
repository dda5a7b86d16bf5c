# register every model on Base.metadata

from app.data.models.user import UserModel
from app.data.models.category import CategoryModel
from app.data.models.product import ProductModel
from app.data.models.cart import CartModel
from app.data.models.cart_line import CartLineModel
from app.data.models.order import OrderModel
from app.data.models.order_line import OrderLineModel

__all__ = [
    "UserModel",
    "CategoryModel",
    "ProductModel",
    "CartModel",
    "CartLineModel",
    "OrderModel",
    "OrderLineModel",
]
