# app/domain/enums.py
from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class Resolution(str, Enum):
    """Outcome of a find-or-create lookup."""

    FOUND = "FOUND"
    CREATED = "CREATED"
