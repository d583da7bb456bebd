from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional

from catalog_admin.schemas.attributes import CategoryOut, SizeOut, ColorOut, GenderOut


class ImageOut(BaseModel):
    id: str
    productId: str
    url: str
    createdAt: Optional[datetime] = None


class ProductOut(BaseModel):
    id: str
    storeId: str
    categoryId: str
    sizeId: Optional[str] = None
    colorId: Optional[str] = None
    genderId: Optional[str] = None
    name: str
    price: float
    quantity: int
    isFeatured: bool = False
    isArchived: bool = False
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    images: List[ImageOut] = []
    # Populated only where the endpoint includes the relation
    category: Optional[CategoryOut] = None
    size: Optional[SizeOut] = None
    color: Optional[ColorOut] = None
    gender: Optional[GenderOut] = None
