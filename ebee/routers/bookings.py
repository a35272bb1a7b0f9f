# ebee/routers/bookings.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ebee.db import database, models
from ebee.schemas.booking import BookingCreate, BookingOut, BookingUpdate
from ebee.schemas.common import Envelope, ok
from ebee.services import BookingService
from ebee.utils.dependencies import get_current_user, require_staff

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("/", response_model=Envelope[List[BookingOut]])
def list_bookings(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    return ok(BookingService(db).get_all_bookings())


@router.get("/my", response_model=Envelope[List[BookingOut]])
def my_bookings(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(BookingService(db).get_user_bookings(current_user.id))


@router.post("/", response_model=Envelope[BookingOut], status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(BookingService(db).create_booking(current_user, payload), "Booking created successfully")


@router.put("/{booking_id}", response_model=Envelope[BookingOut])
def update_booking(
    booking_id: int,
    payload: BookingUpdate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    return ok(BookingService(db).update_booking(booking_id, payload), "Booking updated successfully")


@router.delete("/{booking_id}", response_model=Envelope[None])
def delete_booking(
    booking_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    BookingService(db).delete_booking(current_user, booking_id)
    return ok(message="Booking deleted successfully")
