# app/api/__init__.py
from fastapi import APIRouter

from app.api.routers import carts, orders, products, users

api_router = APIRouter()
api_router.include_router(users.router)
api_router.include_router(products.router)
api_router.include_router(carts.router)
api_router.include_router(orders.router)
