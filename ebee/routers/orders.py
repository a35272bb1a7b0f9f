# ebee/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ebee.core.logging import get_logger
from ebee.db import database, models
from ebee.schemas.common import Envelope, ok
from ebee.schemas.order import OrderCreate, OrderOut, OrderUpdate
from ebee.services import OrderService
from ebee.utils.dependencies import get_current_user, require_admin, require_staff
from ebee.utils.exceptions import NotFoundError

router = APIRouter(prefix="/orders", tags=["orders"])
logger = get_logger(__name__)


@router.post("/", response_model=Envelope[OrderOut], status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    logger.info("Creating order from cart", user_id=current_user.id, cart_id=payload.cart_id)
    return ok(OrderService(db).create_order(current_user, payload), "Order created successfully")


@router.get("/", response_model=Envelope[List[OrderOut]])
def get_all_orders(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    """Get all orders (staff only)"""
    return ok(OrderService(db).get_all_orders())


@router.get("/my", response_model=Envelope[List[OrderOut]])
def get_my_orders(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(OrderService(db).get_user_orders(current_user.id))


@router.get("/{order_id}", response_model=Envelope[OrderOut])
def get_order(
    order_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    order = OrderService(db).get_order(order_id)
    # Customers only see their own orders; hide the rest behind a 404
    if current_user.user_type == models.UserType.customer and order.user_id != current_user.id:
        raise NotFoundError("Order")
    return ok(order)


@router.put("/{order_id}", response_model=Envelope[OrderOut])
def update_order(
    order_id: int,
    payload: OrderUpdate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    return ok(OrderService(db).update_order(order_id, payload), "Order updated successfully")


@router.delete("/{order_id}", response_model=Envelope[None])
def delete_order(
    order_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_admin),
):
    OrderService(db).delete_order(order_id)
    return ok(message="Order deleted successfully")
