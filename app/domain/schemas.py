# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import date, datetime

from app.domain.enums import OrderStatus, Resolution


class ItemIn(BaseModel):
    """Adding a product to the cart."""

    product_id: int = Field(..., gt=0, description="Product id (> 0)")
    quantity: int = Field(..., gt=0, description="Quantity to add (> 0)")


class QuantityIn(BaseModel):
    """New quantity for a cart line; 0 removes the line."""

    quantity: int = Field(..., ge=0, description="New quantity (>= 0)")


class CartLineOut(BaseModel):
    line_id: int
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal


class CartOut(BaseModel):
    cart_id: int
    user_id: int
    items: List[CartLineOut]
    total_amount: Decimal


class AddItemOut(BaseModel):
    """Cart after an add, tagged with whether the cart had to be created."""

    cart: CartOut
    resolution: Resolution


class CartTotalOut(BaseModel):
    cart_id: int
    total_amount: Decimal


class UserCreate(BaseModel):
    """Creating a user."""

    id: int = Field(..., gt=0, description="User id (> 0)")
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: str | None = Field(None, max_length=255)


class UserRead(BaseModel):
    id: int
    name: str
    email: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ProductCreate(BaseModel):
    """Creating a catalog product; the category is found or created by name."""

    name: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1)
    description: str | None = None
    category: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    inventory: int = Field(..., ge=0)


class ProductOut(BaseModel):
    id: int
    name: str
    brand: str
    description: str | None = None
    category: str | None = None
    price: Decimal
    inventory: int


class ProductCreatedOut(BaseModel):
    product: ProductOut
    category_resolution: Resolution


class OrderLineOut(BaseModel):
    id: int
    product_id: int | None = None
    product_name: str
    product_brand: str
    quantity: int
    price: Decimal


class OrderOut(BaseModel):
    id: int
    user_id: int
    order_date: date
    status: OrderStatus
    total_amount: Decimal
    created_at: datetime
    items: List[OrderLineOut]


class CheckoutOut(BaseModel):
    """Result of a checkout; warnings are set when the cart could not be cleared."""

    order: OrderOut
    warnings: List[str] = []
