#app/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import ResourceNotFound
from app.domain.mappers import to_cart_out
from app.domain.schemas import (
    AddItemOut,
    CartOut,
    CartTotalOut,
    ItemIn,
    QuantityIn,
)
from app.services.cart_service import CartService

router = APIRouter(prefix="/carts", tags=["carts"])


def get_service(db: Session):
    return CartService(db)


@router.get("/users/{user_id}", response_model=CartOut)
def get_user_cart(user_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return to_cart_out(svc.get_cart_by_user(user_id))
    except ResourceNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{cart_id}", response_model=CartOut)
def get_cart(cart_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return to_cart_out(svc.get_cart(cart_id))
    except ResourceNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{cart_id}/total", response_model=CartTotalOut)
def get_cart_total(cart_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return CartTotalOut(cart_id=cart_id, total_amount=svc.get_total_price(cart_id))
    except ResourceNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/items", response_model=AddItemOut)
def add_item(
    payload: ItemIn,
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    """
    Adds a product to the user's cart, creating the cart if the user has none.
    """
    svc = get_service(db)
    try:
        cart, resolution = svc.add_line(user_id, payload.product_id, payload.quantity)
        return AddItemOut(cart=to_cart_out(cart), resolution=resolution)
    except ResourceNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{cart_id}/items/{line_id}", response_model=CartOut)
def remove_item(cart_id: int, line_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return to_cart_out(svc.remove_line(cart_id, line_id))
    except ResourceNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{cart_id}/items/{line_id}", response_model=CartOut)
def update_item_quantity(
    cart_id: int,
    line_id: int,
    payload: QuantityIn,
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return to_cart_out(svc.update_quantity(cart_id, line_id, payload.quantity))
    except ResourceNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{cart_id}", status_code=204)
def clear_cart(cart_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        svc.clear(cart_id)
    except ResourceNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
