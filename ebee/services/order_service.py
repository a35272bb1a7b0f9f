"""
Order service layer: checkout from a cart and order bookkeeping.
"""
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ebee.core.logging import get_logger, log_business_event
from ebee.db import models
from ebee.schemas.order import OrderCreate, OrderUpdate
from ebee.tasks import notification_tasks
from ebee.utils.exceptions import DatabaseError, NotFoundError, PermissionDeniedError, ValidationError

logger = get_logger(__name__)


class OrderService:
    """Service class for order-related business logic."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(models.Order).options(
            selectinload(models.Order.items).selectinload(models.OrderItem.product)
        )

    def create_order(self, current_user: models.User, order_data: OrderCreate) -> models.Order:
        """
        Turn the caller's cart into an order in one transaction.

        Prices are read from the products now and copied onto each line; the
        cart itself is left alone until the payment callback confirms payment.
        """
        cart = (
            self.db.query(models.Cart)
            .options(selectinload(models.Cart.items).selectinload(models.CartItem.product))
            .filter(models.Cart.id == order_data.cart_id)
            .first()
        )
        if not cart:
            raise NotFoundError("Cart")
        if cart.user_id != current_user.id:
            raise PermissionDeniedError("This cart belongs to another user")
        if not cart.items:
            raise ValidationError("Cart is empty")

        address = self.db.get(models.UserAddress, order_data.user_address_id)
        if not address or address.user_id != current_user.id:
            raise NotFoundError("Address")

        total_price = 0.0
        lines = []
        for item in cart.items:
            unit_price = float(item.product.price)
            total_price += unit_price * item.quantity
            lines.append(models.OrderItem(product_id=item.product_id, quantity=item.quantity, price=unit_price))

        order = models.Order(
            user_id=current_user.id,
            cart_id=cart.id,
            user_address_id=address.id,
            total_price=round(total_price, 2),
            order_status=models.OrderStatus.pending,
            payment_status=models.PaymentStatus.pending,
            items=lines,
        )

        try:
            self.db.add(order)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Order creation failed", user_id=current_user.id, error=str(e))
            raise DatabaseError()

        log_business_event("order_created", current_user.id, order_id=order.id, total=order.total_price)
        notification_tasks.send_order_notification(
            current_user.email, current_user.name, order.id, order.total_price,
            "We have received your order and are waiting for payment.",
        )
        return self.get_order(order.id)

    def get_all_orders(self) -> List[models.Order]:
        return self._query().order_by(models.Order.id).all()

    def get_order(self, order_id: int) -> models.Order:
        order = self._query().filter(models.Order.id == order_id).first()
        if not order:
            raise NotFoundError("Order")
        return order

    def get_user_orders(self, user_id: int) -> List[models.Order]:
        return self._query().filter(models.Order.user_id == user_id).order_by(models.Order.id.desc()).all()

    def update_order(self, order_id: int, update_data: OrderUpdate) -> models.Order:
        order = self.get_order(order_id)
        changes = update_data.model_dump(exclude_unset=True)

        if changes.get("user_address_id") is not None:
            address = self.db.get(models.UserAddress, changes["user_address_id"])
            if not address or address.user_id != order.user_id:
                raise NotFoundError("Address")

        for key, value in changes.items():
            if value is not None:
                setattr(order, key, value)
        # Kept in step with the lines whatever the caller sent
        order.total_price = order.computed_total_price

        self.db.commit()
        log_business_event("order_updated", order.user_id, order_id=order.id, **{
            k: getattr(v, "value", v) for k, v in changes.items()
        })
        return self.get_order(order.id)

    def delete_order(self, order_id: int) -> None:
        order = self.db.get(models.Order, order_id)
        if not order:
            raise NotFoundError("Order")
        user_id = order.user_id
        self.db.delete(order)
        self.db.commit()
        log_business_event("order_deleted", user_id, order_id=order_id)
