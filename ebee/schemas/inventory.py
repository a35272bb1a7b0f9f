from datetime import datetime
from typing import Optional

from pydantic import Field

from ebee.db.models import ChangeType
from ebee.schemas.common import CamelModel, ProductBrief


class InventoryCreate(CamelModel):
    quantity: int = Field(..., gt=0)
    change_type: ChangeType
    reason: str = Field(..., min_length=1)
    product_id: int
    order_id: Optional[int] = None


class InventoryOut(CamelModel):
    id: int
    quantity: int
    change_type: ChangeType
    reason: str
    product_id: int
    order_id: Optional[int] = None
    created_at: Optional[datetime] = None
    product: Optional[ProductBrief] = None
