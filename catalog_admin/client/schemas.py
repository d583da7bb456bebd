from pydantic import BaseModel, Field
from typing import List, Optional


class CategoryFormValues(BaseModel):
    name: str = Field(min_length=1)


class AttributeFormValues(BaseModel):
    """Shared by sizes, colors and genders."""
    name: str = Field(min_length=1)
    value: str = Field(min_length=1)


class ImageValue(BaseModel):
    url: str


class ProductFormValues(BaseModel):
    name: str = Field(min_length=1)
    images: List[ImageValue]
    price: float = Field(ge=1)
    quantity: int = Field(ge=0)
    categoryId: str = Field(min_length=1)
    sizeId: str = Field(min_length=1)
    colorId: str = Field(min_length=1)
    genderId: str = Field(min_length=1)
    isFeatured: Optional[bool] = False
    isArchived: Optional[bool] = False
