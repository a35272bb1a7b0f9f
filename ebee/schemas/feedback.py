from datetime import datetime
from typing import Optional

from pydantic import Field

from ebee.schemas.common import CamelModel, ProductBrief, UserBrief


class FeedbackCreate(CamelModel):
    rating: int = Field(..., ge=1, le=5, description="Rating must be between 1 and 5")
    comment: Optional[str] = None
    product_id: int


class FeedbackUpdate(CamelModel):
    rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = None


class FeedbackOut(CamelModel):
    id: int
    rating: int
    comment: Optional[str] = None
    user_id: int
    product_id: int
    created_at: Optional[datetime] = None
    user: Optional[UserBrief] = None
    product: Optional[ProductBrief] = None
