# app/repos/cart_repo.py
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_line import CartLineModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    # carts
    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def get_cart_by_user(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    def get_cart_by_user_for_update(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel)
            .where(CartModel.user_id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.flush()
        return cart

    def delete_lines(self, cart: CartModel) -> int:
        result = self.db.execute(delete(CartLineModel).where(CartLineModel.cart_id == cart.id))
        self.db.expire(cart, ["items"])
        return result.rowcount

    def delete_cart(self, cart: CartModel) -> None:
        # lines first, then the cart row itself
        self.delete_lines(cart)
        self.db.delete(cart)
        self.db.flush()

    # lines
    def get_line(self, cart_id: int, line_id: int) -> CartLineModel | None:
        return self.db.execute(
            select(CartLineModel).where(
                CartLineModel.cart_id == cart_id,
                CartLineModel.id == line_id,
            )
        ).scalar_one_or_none()

    def get_line_for_product(self, cart_id: int, product_id: int) -> CartLineModel | None:
        return self.db.execute(
            select(CartLineModel).where(
                CartLineModel.cart_id == cart_id,
                CartLineModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_line(self, line: CartLineModel) -> CartLineModel:
        self.db.add(line)
        self.db.flush()
        return line

    def delete_line(self, line: CartLineModel) -> None:
        self.db.delete(line)
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
