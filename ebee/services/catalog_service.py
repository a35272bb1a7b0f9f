"""
Workshop services (repairs, maintenance) offered for booking.
"""
from typing import List

from sqlalchemy.orm import Session, selectinload

from ebee.core.logging import log_business_event
from ebee.db import models
from ebee.schemas.service import ServiceCreate, ServiceUpdate
from ebee.utils.exceptions import NotFoundError


class CatalogService:
    """CRUD for the `services` table; named to keep clear of the service-layer classes."""

    def __init__(self, db: Session):
        self.db = db

    def get_all_services(self) -> List[models.Service]:
        return (
            self.db.query(models.Service)
            .options(selectinload(models.Service.owner))
            .order_by(models.Service.id)
            .all()
        )

    def get_service(self, service_id: int) -> models.Service:
        service = (
            self.db.query(models.Service)
            .options(selectinload(models.Service.owner))
            .filter(models.Service.id == service_id)
            .first()
        )
        if not service:
            raise NotFoundError("Service")
        return service

    def create_service(self, current_user: models.User, service_data: ServiceCreate) -> models.Service:
        service = models.Service(
            name=service_data.name.strip(),
            description=service_data.description,
            price=service_data.price,
            user_id=current_user.id,
        )
        self.db.add(service)
        self.db.commit()
        log_business_event("service_created", current_user.id, service_id=service.id)
        return self.get_service(service.id)

    def update_service(self, service_id: int, update_data: ServiceUpdate) -> models.Service:
        service = self.get_service(service_id)
        for key, value in update_data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(service, key, value)
        self.db.commit()
        self.db.refresh(service)
        return service

    def delete_service(self, service_id: int) -> None:
        """Bookings for the service are removed with it."""
        service = self.db.get(models.Service, service_id)
        if not service:
            raise NotFoundError("Service")
        self.db.delete(service)
        self.db.commit()
