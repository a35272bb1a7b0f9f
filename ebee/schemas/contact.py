from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from ebee.schemas.common import CamelModel


class ContactCreate(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    message: str = Field(..., min_length=1)


class ContactOut(CamelModel):
    id: int
    name: str
    email: str
    message: str
    created_at: Optional[datetime] = None
