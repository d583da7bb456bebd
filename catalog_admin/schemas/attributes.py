from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class CategoryOut(BaseModel):
    id: str
    storeId: str
    name: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class SizeOut(CategoryOut):
    value: str


class ColorOut(CategoryOut):
    value: str


class GenderOut(CategoryOut):
    value: str
