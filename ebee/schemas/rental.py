from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from ebee.db.models import RentalStatus
from ebee.schemas.common import CamelModel, ProductBrief, UserBrief, as_utc


class RentalCreate(CamelModel):
    product_id: int
    rent_start: datetime
    rent_end: datetime
    price: float = Field(..., ge=0)
    status: Optional[RentalStatus] = None
    staff_id: Optional[int] = None

    @field_validator("rent_start", "rent_end")
    @classmethod
    def normalize_to_utc(cls, value):
        return as_utc(value)

    @model_validator(mode="after")
    def check_period(self):
        if self.rent_end <= self.rent_start:
            raise ValueError("rentEnd must be after rentStart")
        return self


class RentalUpdate(CamelModel):
    product_id: Optional[int] = None
    rent_start: Optional[datetime] = None
    rent_end: Optional[datetime] = None
    price: Optional[float] = Field(None, ge=0)
    status: Optional[RentalStatus] = None
    staff_id: Optional[int] = None
    fine_id: Optional[int] = None

    @field_validator("rent_start", "rent_end")
    @classmethod
    def normalize_to_utc(cls, value):
        return as_utc(value)


class RentalOut(CamelModel):
    id: int
    user_id: int
    product_id: int
    price: float
    rent_start: datetime
    rent_end: datetime
    fine_id: Optional[int] = None
    staff_id: Optional[int] = None
    status: RentalStatus
    created_at: Optional[datetime] = None
    user: Optional[UserBrief] = None
    product: Optional[ProductBrief] = None
