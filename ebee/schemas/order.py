from datetime import datetime
from typing import List, Optional

from ebee.db.models import OrderStatus, PaymentStatus
from ebee.schemas.common import CamelModel, ProductBrief


class OrderCreate(CamelModel):
    cart_id: int
    user_address_id: int


class OrderUpdate(CamelModel):
    # totalPrice is derived from the order items and never taken from clients
    order_status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    user_address_id: Optional[int] = None


class OrderItemOut(CamelModel):
    id: int
    product_id: int
    quantity: int
    price: float
    product: Optional[ProductBrief] = None


class OrderOut(CamelModel):
    id: int
    user_id: int
    cart_id: int
    user_address_id: int
    total_price: float
    order_status: OrderStatus
    payment_status: PaymentStatus
    created_at: Optional[datetime] = None
    items: List[OrderItemOut] = []


class OrderBrief(CamelModel):
    id: int
    order_status: OrderStatus
    user_id: int
    user_address_id: int
