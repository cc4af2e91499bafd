from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from core.db import get_db
from core.exceptions import BadRequestError, NotFoundError
from models.product import Product
from schemas.product import ProductOut, ProductUpdate
from services.file_storage import FileStorage, get_file_storage
from services.product_update import ProductUpdateHandler

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    return db.query(Product).order_by(Product.id).all()


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    product = db.query(Product).filter(Product.id == product_id).one_or_none()
    if not product:
        raise NotFoundError("Product", product_id)
    return product


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    data: ProductUpdate,
    db: Session = Depends(get_db),
    storage: FileStorage = Depends(get_file_storage),
):
    if data.id != product_id:
        raise BadRequestError("Product id does not match the URL")
    return ProductUpdateHandler(db, storage=storage).update(data)
