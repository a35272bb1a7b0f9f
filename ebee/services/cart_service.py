from typing import Optional

from sqlalchemy.orm import Session, selectinload

from ebee.core.logging import get_logger
from ebee.db import models
from ebee.utils.exceptions import NotFoundError

logger = get_logger(__name__)


class CartService:

    def __init__(self, db: Session):
        self.db = db

    def _find_cart(self, user_id: int) -> Optional[models.Cart]:
        return (
            self.db.query(models.Cart)
            .options(selectinload(models.Cart.items).selectinload(models.CartItem.product))
            .filter(models.Cart.user_id == user_id)
            .order_by(models.Cart.id.desc())
            .first()
        )

    def _get_item(self, user_id: int, item_id: int) -> models.CartItem:
        item = self.db.get(models.CartItem, item_id)
        if not item or item.cart.user_id != user_id:
            raise NotFoundError("Cart item")
        return item

    def add_to_cart(self, user_id: int, product_id: int) -> models.Cart:
        """Put one unit of a product in the user's cart, creating the cart on first use."""
        if not self.db.get(models.Product, product_id):
            raise NotFoundError("Product")

        cart = self._find_cart(user_id)
        if cart is None:
            cart = models.Cart(user_id=user_id)
            self.db.add(cart)
            self.db.flush()

        item = (
            self.db.query(models.CartItem)
            .filter(models.CartItem.cart_id == cart.id, models.CartItem.product_id == product_id)
            .first()
        )
        if item:
            item.quantity += 1
        else:
            self.db.add(models.CartItem(cart_id=cart.id, product_id=product_id, quantity=1))

        self.db.commit()
        self.db.expire_all()
        return self._find_cart(user_id)

    def get_cart(self, user_id: int) -> models.Cart:
        cart = self._find_cart(user_id)
        if cart is None or not cart.items:
            raise NotFoundError(message="Cart is empty")
        return cart

    def increase_quantity(self, user_id: int, item_id: int) -> models.CartItem:
        item = self._get_item(user_id, item_id)
        item.quantity += 1
        self.db.commit()
        self.db.refresh(item)
        return item

    def decrease_quantity(self, user_id: int, item_id: int) -> Optional[models.CartItem]:
        """Returns None when the last unit was taken out and the item removed."""
        item = self._get_item(user_id, item_id)
        if item.quantity <= 1:
            self.db.delete(item)
            self.db.commit()
            return None
        item.quantity -= 1
        self.db.commit()
        self.db.refresh(item)
        return item

    def remove_item(self, user_id: int, item_id: int) -> None:
        item = self._get_item(user_id, item_id)
        self.db.delete(item)
        self.db.commit()

    def clear_cart(self, user_id: int) -> None:
        cart = self._find_cart(user_id)
        if cart is None:
            return
        self.empty_cart(cart)
        self.db.commit()

    def empty_cart(self, cart: models.Cart) -> None:
        """Drop the items; the cart row goes too unless an order still points at it."""
        self.db.query(models.CartItem).filter(models.CartItem.cart_id == cart.id).delete(
            synchronize_session=False
        )
        self.db.expire(cart, ["items"])
        referenced = (
            self.db.query(models.Order.id).filter(models.Order.cart_id == cart.id).first()
        )
        if referenced is None:
            self.db.delete(cart)
        logger.info("Cart emptied", cart_id=cart.id, kept=referenced is not None)
