from typing import List

from sqlalchemy.orm import Session, selectinload

from ebee.core.logging import log_business_event
from ebee.db import models
from ebee.schemas.booking import BookingCreate, BookingUpdate
from ebee.utils.dependencies import STAFF_ROLES
from ebee.utils.exceptions import NotFoundError, PermissionDeniedError, ValidationError


class BookingService:

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(models.Booking).options(
            selectinload(models.Booking.service),
            selectinload(models.Booking.user),
            selectinload(models.Booking.technician),
        )

    def get_all_bookings(self) -> List[models.Booking]:
        return self._query().order_by(models.Booking.created_at.desc(), models.Booking.id.desc()).all()

    def get_user_bookings(self, user_id: int) -> List[models.Booking]:
        return (
            self._query()
            .filter(models.Booking.user_id == user_id)
            .order_by(models.Booking.created_at.desc(), models.Booking.id.desc())
            .all()
        )

    def get_booking(self, booking_id: int) -> models.Booking:
        booking = self._query().filter(models.Booking.id == booking_id).first()
        if not booking:
            raise NotFoundError("Booking")
        return booking

    def create_booking(self, current_user: models.User, booking_data: BookingCreate) -> models.Booking:
        if not booking_data.service_id:
            raise ValidationError("Service ID is required")
        if not self.db.get(models.Service, booking_data.service_id):
            raise NotFoundError("Service")

        booking = models.Booking(
            service_id=booking_data.service_id,
            user_id=current_user.id,
            notes=booking_data.notes,
            status=models.BookingStatus.pending,
        )
        self.db.add(booking)
        self.db.commit()
        log_business_event("booking_created", current_user.id, booking_id=booking.id)
        return self.get_booking(booking.id)

    def update_booking(self, booking_id: int, update_data: BookingUpdate) -> models.Booking:
        booking = self.get_booking(booking_id)
        changes = update_data.model_dump(exclude_unset=True)

        if changes.get("assigned_to") is not None and not self.db.get(models.User, changes["assigned_to"]):
            raise NotFoundError("Assigned user")

        for key, value in changes.items():
            if value is not None or key in ("notes", "assigned_to"):
                setattr(booking, key, value)
        self.db.commit()
        return self.get_booking(booking.id)

    def delete_booking(self, current_user: models.User, booking_id: int) -> None:
        booking = self.db.get(models.Booking, booking_id)
        if not booking:
            raise NotFoundError("Booking")
        if booking.user_id != current_user.id and current_user.user_type not in STAFF_ROLES:
            raise PermissionDeniedError("You can only cancel your own bookings")
        self.db.delete(booking)
        self.db.commit()
