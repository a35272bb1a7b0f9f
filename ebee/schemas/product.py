from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from ebee.db.models import ProductCategory
from ebee.schemas.common import CamelModel, UserBrief


class ProductBase(CamelModel):
    id: int
    name: str
    description: str
    price: float
    category: ProductCategory
    stock_quantity: int
    image_url: str
    cloudinary_id: str


class ProductFeedbackOut(CamelModel):
    id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    user: Optional[UserBrief] = None


class ProductOut(ProductBase):
    supplier: Optional[UserBrief] = None
    feedbacks: List[ProductFeedbackOut] = []


class ProductCreatedOut(CamelModel):
    id: int
    name: str
    price: float
    image_url: str
    category: ProductCategory
    cloudinary_id: str


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category: Optional[ProductCategory] = None
    stock_quantity: Optional[int] = Field(None, ge=0)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Product name cannot be empty or whitespace only')
        return v.strip() if v else v


class ProductSearch(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    category: Optional[ProductCategory] = None
