from typing import List

from sqlalchemy.orm import Session, selectinload

from ebee.core.logging import get_logger, log_business_event
from ebee.db import models
from ebee.schemas.inventory import InventoryCreate
from ebee.utils.exceptions import NotFoundError

logger = get_logger(__name__)


class InventoryService:
    """Stock movement log; each entry is also applied to the product's stockQuantity."""

    def __init__(self, db: Session):
        self.db = db

    def get_all_inventories(self) -> List[models.Inventory]:
        return (
            self.db.query(models.Inventory)
            .options(selectinload(models.Inventory.product))
            .order_by(models.Inventory.created_at.desc(), models.Inventory.id.desc())
            .all()
        )

    def create_inventory(self, current_user: models.User, inventory_data: InventoryCreate) -> models.Inventory:
        product = self.db.get(models.Product, inventory_data.product_id)
        if not product:
            raise NotFoundError("Product")
        if inventory_data.order_id is not None and not self.db.get(models.Order, inventory_data.order_id):
            raise NotFoundError("Order")

        entry = models.Inventory(**inventory_data.model_dump())
        self.db.add(entry)

        before = product.stock_quantity
        product.stock_quantity = self.apply_change(before, inventory_data.change_type, inventory_data.quantity)
        self.db.commit()
        self.db.refresh(entry)

        log_business_event(
            "stock_changed", current_user.id,
            product_id=product.id, before=before, after=product.stock_quantity,
            change_type=inventory_data.change_type.value,
        )
        return entry

    @staticmethod
    def apply_change(stock: int, change_type: models.ChangeType, quantity: int) -> int:
        if change_type == models.ChangeType.add:
            return stock + quantity
        # remove and adjust both take stock out; never below zero
        return max(stock - quantity, 0)

    def delete_inventory(self, inventory_id: int) -> None:
        entry = self.db.get(models.Inventory, inventory_id)
        if not entry:
            raise NotFoundError("Inventory record")
        self.db.delete(entry)
        self.db.commit()
