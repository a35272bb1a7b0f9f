# ebee/routers/inventories.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ebee.db import database, models
from ebee.schemas.common import Envelope, ok
from ebee.schemas.inventory import InventoryCreate, InventoryOut
from ebee.services import InventoryService
from ebee.utils.dependencies import require_role, require_staff

router = APIRouter(prefix="/inventories", tags=["inventories"])

require_stock_keeper = require_role(models.UserType.admin, models.UserType.inventory_manager)


@router.get("/", response_model=Envelope[List[InventoryOut]])
def list_inventory_logs(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    return ok(InventoryService(db).get_all_inventories())


@router.post("/", response_model=Envelope[InventoryOut], status_code=status.HTTP_201_CREATED)
def create_inventory_log(
    payload: InventoryCreate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_stock_keeper),
):
    return ok(InventoryService(db).create_inventory(current_user, payload), "Inventory log created successfully")


@router.delete("/{inventory_id}", response_model=Envelope[None])
def delete_inventory_log(
    inventory_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_stock_keeper),
):
    InventoryService(db).delete_inventory(inventory_id)
    return ok(message="Inventory log deleted successfully")
