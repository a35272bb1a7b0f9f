from datetime import date, datetime
from typing import Optional

from ebee.db.models import DispatchStatus
from ebee.schemas.common import CamelModel, UserBrief
from ebee.schemas.order import OrderBrief


class DispatchCreate(CamelModel):
    driver_id: Optional[int] = None
    order_id: Optional[int] = None
    delivery_date: Optional[date] = None


class DispatchUpdate(CamelModel):
    delivery_date: Optional[date] = None
    status: Optional[DispatchStatus] = None
    driver_id: Optional[int] = None


class DispatchOut(CamelModel):
    id: int
    driver_id: int
    order_id: int
    delivery_date: Optional[date] = None
    status: DispatchStatus
    created_at: Optional[datetime] = None
    driver: Optional[UserBrief] = None
    order: Optional[OrderBrief] = None
