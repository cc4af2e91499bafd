from pydantic import BaseModel
from typing import List


class ReferenceProductIn(BaseModel):
    id: int = 0
    reference_id: int = 0
    product_id: int


class ReferenceIn(BaseModel):
    id: int = 0
    name: str
    reference_products: List[ReferenceProductIn] = []


class ReferenceProductOut(BaseModel):
    id: int
    reference_id: int
    product_id: int

    class Config:
        from_attributes = True
        frozen = True


class ReferenceOut(BaseModel):
    id: int
    product_id: int
    name: str
    reference_products: List[ReferenceProductOut] = []

    class Config:
        from_attributes = True
        frozen = True
