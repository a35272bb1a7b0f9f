from datetime import datetime
from typing import Optional

from ebee.db.models import BookingStatus
from ebee.schemas.common import CamelModel, UserBrief
from ebee.schemas.service import ServiceBrief


class BookingCreate(CamelModel):
    service_id: Optional[int] = None
    notes: Optional[str] = None


class BookingUpdate(CamelModel):
    status: Optional[BookingStatus] = None
    notes: Optional[str] = None
    assigned_to: Optional[int] = None


class BookingOut(CamelModel):
    id: int
    service_id: int
    user_id: int
    assigned_to: Optional[int] = None
    status: BookingStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    service: Optional[ServiceBrief] = None
    user: Optional[UserBrief] = None
    technician: Optional[UserBrief] = None
