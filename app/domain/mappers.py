# app/domain/mappers.py
"""Field-by-field construction of response schemas from ORM entities."""

from app.data.models.cart import CartModel
from app.data.models.cart_line import CartLineModel
from app.data.models.order import OrderModel
from app.data.models.order_line import OrderLineModel
from app.data.models.product import ProductModel
from app.data.models.user import UserModel
from app.domain.enums import OrderStatus
from app.domain.schemas import (
    CartLineOut,
    CartOut,
    OrderLineOut,
    OrderOut,
    ProductOut,
    UserRead,
)


def to_cart_line_out(line: CartLineModel) -> CartLineOut:
    return CartLineOut(
        line_id=line.id,
        product_id=line.product_id,
        product_name=line.product.name,
        quantity=line.quantity,
        unit_price=line.unit_price,
    )


def to_cart_out(cart: CartModel) -> CartOut:
    return CartOut(
        cart_id=cart.id,
        user_id=cart.user_id,
        items=[to_cart_line_out(i) for i in cart.items],
        total_amount=cart.total_amount,
    )


def to_order_line_out(line: OrderLineModel) -> OrderLineOut:
    return OrderLineOut(
        id=line.id,
        product_id=line.product_id,
        product_name=line.product_name,
        product_brand=line.product_brand,
        quantity=line.quantity,
        price=line.price,
    )


def to_order_out(order: OrderModel) -> OrderOut:
    return OrderOut(
        id=order.id,
        user_id=order.user_id,
        order_date=order.order_date,
        status=OrderStatus(order.status),
        total_amount=order.total_amount,
        created_at=order.created_at,
        items=[to_order_line_out(i) for i in order.lines],
    )


def to_product_out(product: ProductModel) -> ProductOut:
    return ProductOut(
        id=product.id,
        name=product.name,
        brand=product.brand,
        description=product.description,
        category=product.category.name if product.category else None,
        price=product.price,
        inventory=product.inventory,
    )


def to_user_read(user: UserModel) -> UserRead:
    return UserRead(id=user.id, name=user.name, email=user.email)
