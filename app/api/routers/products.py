# app/api/routers/products.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import ResourceNotFound
from app.domain.mappers import to_product_out
from app.domain.schemas import ProductCreate, ProductCreatedOut, ProductOut
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    svc = ProductService(db)
    try:
        return to_product_out(svc.get_product(product_id))
    except ResourceNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/", response_model=ProductCreatedOut, status_code=201)
def add_product(payload: ProductCreate, db: Session = Depends(get_db)):
    svc = ProductService(db)
    product, resolution = svc.add_product(payload)
    return ProductCreatedOut(product=to_product_out(product), category_resolution=resolution)
