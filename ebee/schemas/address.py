import re
from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, field_validator

from ebee.db.models import KENYAN_COUNTIES
from ebee.schemas.common import CamelModel

PHONE_PATTERN = re.compile(r"^(?:\+254|0)[17]\d{8}$")
POSTAL_CODE_PATTERN = re.compile(r"^\d{5}$")


class AddressUpdate(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    county: Optional[str] = None
    sub_county: Optional[str] = None
    ward: Optional[str] = None
    street: Optional[str] = None
    phone_number: Optional[str] = None
    postal_code: Optional[str] = None

    @field_validator("county")
    @classmethod
    def check_county(cls, v):
        if v is not None and v not in KENYAN_COUNTIES:
            raise ValueError(f"Unknown county: {v}")
        return v

    @field_validator("phone_number")
    @classmethod
    def check_phone(cls, v):
        if v is not None and not PHONE_PATTERN.match(v):
            raise ValueError("Invalid Kenyan phone number format. Use +254... or 07...")
        return v

    @field_validator("postal_code")
    @classmethod
    def check_postal_code(cls, v):
        if v is not None and not POSTAL_CODE_PATTERN.match(v):
            raise ValueError("Invalid Kenyan postal code (must be 5 digits)")
        return v


class AddressCreate(AddressUpdate):
    # Same checks, required fields
    county: str
    phone_number: str
    postal_code: str


class AddressOut(CamelModel):
    id: int
    user_id: int
    county: str
    sub_county: Optional[str] = None
    ward: Optional[str] = None
    street: Optional[str] = None
    phone_number: str
    postal_code: str
    created_at: Optional[datetime] = None
