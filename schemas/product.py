from datetime import datetime
from pydantic import BaseModel, Base64Bytes
from typing import Any, Dict, List, Optional

from schemas.reference import ReferenceIn, ReferenceOut, ReferenceProductIn, ReferenceProductOut


class LookupIn(BaseModel):
    id: int
    name: Optional[str] = None


class CategoryIn(BaseModel):
    id: int = 0
    name: Optional[str] = None


class ProductModelIn(BaseModel):
    id: int = 0
    name: str
    sku: Optional[str] = None


class OptionIn(BaseModel):
    id: int = 0
    name: str
    value: Optional[str] = None
    price_delta: float = 0


class StockIn(BaseModel):
    id: int = 0
    quantity: int = 0
    last_order: Optional[datetime] = None
    ordered_last: Optional[datetime] = None


class ProductDiscountIn(BaseModel):
    id: int = 0
    percentage: float
    valid_from: Optional[datetime] = None
    expires: Optional[datetime] = None


class CouponIn(BaseModel):
    id: int = 0
    code: str
    amount: float = 0
    valid_from: Optional[datetime] = None
    expires: Optional[datetime] = None


class ProductUiFileIn(BaseModel):
    id: int = 0
    folder: str
    filename: str
    sort_order: int = 0
    # base64 in JSON; only present when the file itself is being replaced
    form_content: Optional[Base64Bytes] = None


class ProductUiIn(BaseModel):
    id: int = 0
    layout: Optional[Dict[str, Any]] = None
    product_ui_files: List[ProductUiFileIn] = []


class ProductUpdate(BaseModel):
    """Full replacement representation of a product as edited in the admin UI."""

    id: int
    name: str
    description: Optional[str] = None
    price: float = 0
    status_id: Optional[int] = None
    brand_id: Optional[int] = None
    department_id: Optional[int] = None

    # Server-owned; always discarded before the write
    status: Optional[LookupIn] = None
    brand: Optional[LookupIn] = None
    department: Optional[LookupIn] = None
    cart_items: Optional[List[Dict[str, Any]]] = None
    order_details: Optional[List[Dict[str, Any]]] = None

    categories: Optional[List[CategoryIn]] = None
    models: Optional[List[ProductModelIn]] = None
    options: Optional[List[OptionIn]] = None
    stock: Optional[List[StockIn]] = None
    product_discounts: Optional[List[ProductDiscountIn]] = None
    coupons: Optional[List[CouponIn]] = None
    references: Optional[List[ReferenceIn]] = None
    reference_products: Optional[List[ReferenceProductIn]] = None
    product_ui: Optional[ProductUiIn] = None


class CategoryOut(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True
        frozen = True


class ProductModelOut(BaseModel):
    id: int
    name: str
    sku: Optional[str] = None

    class Config:
        from_attributes = True
        frozen = True


class OptionOut(BaseModel):
    id: int
    name: str
    value: Optional[str] = None
    price_delta: float

    class Config:
        from_attributes = True
        frozen = True


class StockOut(BaseModel):
    id: int
    quantity: int
    last_order: Optional[datetime] = None
    ordered_last: Optional[datetime] = None

    class Config:
        from_attributes = True
        frozen = True


class ProductDiscountOut(BaseModel):
    id: int
    percentage: float
    valid_from: Optional[datetime] = None
    expires: Optional[datetime] = None

    class Config:
        from_attributes = True
        frozen = True


class CouponOut(BaseModel):
    id: int
    code: str
    amount: float
    valid_from: Optional[datetime] = None
    expires: Optional[datetime] = None

    class Config:
        from_attributes = True
        frozen = True


class ProductUiFileOut(BaseModel):
    id: int
    folder: str
    filename: str
    sort_order: int

    class Config:
        from_attributes = True
        frozen = True


class ProductUiOut(BaseModel):
    id: int
    layout: Optional[Dict[str, Any]] = None
    product_ui_files: List[ProductUiFileOut] = []

    class Config:
        from_attributes = True
        frozen = True


class ProductOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    status_id: Optional[int] = None
    brand_id: Optional[int] = None
    department_id: Optional[int] = None
    updated_at: Optional[datetime] = None
    categories: List[CategoryOut] = []
    models: List[ProductModelOut] = []
    options: List[OptionOut] = []
    stock: List[StockOut] = []
    product_discounts: List[ProductDiscountOut] = []
    coupons: List[CouponOut] = []
    references: List[ReferenceOut] = []
    reference_products: List[ReferenceProductOut] = []
    product_ui: Optional[ProductUiOut] = None

    class Config:
        from_attributes = True
        frozen = True
