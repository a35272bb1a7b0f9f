from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from ebee.schemas.common import CamelModel, UserBrief


class ServiceCreate(CamelModel):
    name: str
    description: Optional[str] = None
    price: float = Field(..., gt=0)

    @field_validator('name')
    @classmethod
    def name_must_not_be_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('Service name cannot be empty')
        return v


class ServiceUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(None, gt=0)


class ServiceBrief(CamelModel):
    id: int
    name: str
    description: Optional[str] = None


class ServiceOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None
    owner: Optional[UserBrief] = None
