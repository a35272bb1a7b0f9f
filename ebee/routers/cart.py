# ebee/routers/cart.py
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ebee.db import database, models
from ebee.schemas.cart import CartAdd, CartItemOut, CartOut
from ebee.schemas.common import Envelope, ok
from ebee.services import CartService
from ebee.utils.dependencies import get_current_user

router = APIRouter(prefix="/cart", tags=["cart"])


@router.post("/", response_model=Envelope[CartOut])
def add_to_cart(
    payload: CartAdd,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    cart = CartService(db).add_to_cart(current_user.id, payload.product_id)
    return ok(cart, "Product added to cart")


@router.get("/", response_model=Envelope[CartOut])
def get_cart(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(CartService(db).get_cart(current_user.id))


@router.put("/items/{item_id}/increase", response_model=Envelope[CartItemOut])
def increase_quantity(
    item_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(CartService(db).increase_quantity(current_user.id, item_id), "Quantity increased")


@router.put("/items/{item_id}/decrease", response_model=Envelope[Optional[CartItemOut]])
def decrease_quantity(
    item_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    item = CartService(db).decrease_quantity(current_user.id, item_id)
    if item is None:
        return ok(message="Item removed from cart")
    return ok(item, "Quantity decreased")


@router.delete("/items/{item_id}", response_model=Envelope[None])
def remove_item(
    item_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    CartService(db).remove_item(current_user.id, item_id)
    return ok(message="Item removed from cart")


@router.delete("/", response_model=Envelope[None])
def clear_cart(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    CartService(db).clear_cart(current_user.id)
    return ok(message="Cart cleared successfully")
