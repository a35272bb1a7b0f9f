from typing import List

from sqlalchemy.orm import Session, selectinload

from ebee.core.logging import log_business_event
from ebee.db import models
from ebee.schemas.dispatch import DispatchCreate, DispatchUpdate
from ebee.utils.exceptions import ConflictError, NotFoundError, ValidationError


class DispatchService:

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(models.Dispatch).options(
            selectinload(models.Dispatch.driver), selectinload(models.Dispatch.order)
        )

    def _check_driver(self, driver_id: int) -> models.User:
        driver = self.db.get(models.User, driver_id)
        if not driver or driver.user_type != models.UserType.driver:
            raise ValidationError("Invalid driver. Driver must exist and have userType 'driver'.")
        return driver

    def get_all_dispatches(self) -> List[models.Dispatch]:
        return self._query().order_by(models.Dispatch.id).all()

    def get_dispatch(self, dispatch_id: int) -> models.Dispatch:
        dispatch = self._query().filter(models.Dispatch.id == dispatch_id).first()
        if not dispatch:
            raise NotFoundError("Dispatch")
        return dispatch

    def create_dispatch(self, dispatch_data: DispatchCreate) -> models.Dispatch:
        if not dispatch_data.driver_id or not dispatch_data.order_id or not dispatch_data.delivery_date:
            raise ValidationError("Missing required fields: driverId, orderId, deliveryDate")

        self._check_driver(dispatch_data.driver_id)
        if not self.db.get(models.Order, dispatch_data.order_id):
            raise NotFoundError("Order")

        existing = (
            self.db.query(models.Dispatch)
            .filter(models.Dispatch.order_id == dispatch_data.order_id)
            .first()
        )
        if existing:
            raise ConflictError("Dispatch already exists for this order")

        dispatch = models.Dispatch(
            driver_id=dispatch_data.driver_id,
            order_id=dispatch_data.order_id,
            delivery_date=dispatch_data.delivery_date,
            status=models.DispatchStatus.assigned,
        )
        self.db.add(dispatch)
        self.db.commit()
        log_business_event("dispatch_created", dispatch.driver_id, dispatch_id=dispatch.id, order_id=dispatch.order_id)
        return self.get_dispatch(dispatch.id)

    def update_dispatch(self, dispatch_id: int, update_data: DispatchUpdate) -> models.Dispatch:
        dispatch = self.get_dispatch(dispatch_id)
        changes = update_data.model_dump(exclude_unset=True, exclude_none=True)
        if "driver_id" in changes:
            self._check_driver(changes["driver_id"])

        for key, value in changes.items():
            setattr(dispatch, key, value)
        self.db.commit()
        return self.get_dispatch(dispatch.id)

    def delete_dispatch(self, dispatch_id: int) -> None:
        dispatch = self.db.get(models.Dispatch, dispatch_id)
        if not dispatch:
            raise NotFoundError("Dispatch")
        self.db.delete(dispatch)
        self.db.commit()
