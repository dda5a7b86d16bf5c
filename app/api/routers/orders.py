# app/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import (
    EmptyCart,
    InsufficientInventory,
    PersistenceFailure,
    ResourceNotFound,
)
from app.domain.mappers import to_order_out
from app.domain.schemas import CheckoutOut, OrderOut
from app.services.checkout_service import CheckoutService
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_checkout_service(db: Session = Depends(get_db)) -> CheckoutService:
    return CheckoutService(db)


@router.post("/checkout", response_model=CheckoutOut, status_code=201)
def checkout(
    user_id: int = Query(..., gt=0),
    svc: CheckoutService = Depends(get_checkout_service),
):
    """
    Places an order from the user's cart.
    A cart that could not be cleared afterwards is reported in `warnings`.
    """
    try:
        result = svc.checkout(user_id)
    except ResourceNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InsufficientInventory as e:
        raise HTTPException(status_code=409, detail=str(e))
    except EmptyCart as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=str(e))

    return CheckoutOut(order=to_order_out(result.order), warnings=result.warnings)


@router.get("/users/{user_id}", response_model=List[OrderOut])
def list_user_orders(user_id: int, db: Session = Depends(get_db)):
    svc = OrderService(db)
    return [to_order_out(o) for o in svc.list_for_user(user_id)]


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, db: Session = Depends(get_db)):
    svc = OrderService(db)
    try:
        return to_order_out(svc.get(order_id))
    except ResourceNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
