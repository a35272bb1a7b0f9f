from typing import List, Optional

from ebee.schemas.common import CamelModel, ProductBrief


class CartAdd(CamelModel):
    product_id: int


class CartItemOut(CamelModel):
    id: int
    cart_id: int
    product_id: int
    quantity: int
    product: Optional[ProductBrief] = None


class CartOut(CamelModel):
    id: int
    user_id: int
    items: List[CartItemOut] = []
