from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ebee.db.models import ProductCategory

T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


def ok(data: Any = None, message: Optional[str] = None) -> dict:
    return {"success": True, "message": message, "data": data}


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Aware values are converted to UTC; naive ones are taken to already be UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UserBrief(CamelModel):
    id: int
    name: str
    email: Optional[str] = None


class ProductBrief(CamelModel):
    id: int
    name: str
    price: Optional[float] = None
    category: Optional[ProductCategory] = None
    image_url: Optional[str] = None
