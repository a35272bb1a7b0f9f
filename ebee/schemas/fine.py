from datetime import datetime
from typing import Optional

from pydantic import Field

from ebee.schemas.common import CamelModel, UserBrief


class FineCreate(CamelModel):
    reason: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    user_id: int
    rental_id: int


class FineUpdate(CamelModel):
    reason: Optional[str] = Field(None, min_length=1)
    amount: Optional[float] = Field(None, ge=0)


class FineOut(CamelModel):
    id: int
    reason: str
    amount: float
    user_id: int
    rental_id: int
    created_at: Optional[datetime] = None
    user: Optional[UserBrief] = None
