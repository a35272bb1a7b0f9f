# ebee/routers/rentals.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ebee.db import database, models
from ebee.schemas.common import Envelope, ok
from ebee.schemas.rental import RentalCreate, RentalOut, RentalUpdate
from ebee.services import RentalService
from ebee.utils.dependencies import get_current_user, require_staff

router = APIRouter(prefix="/rentals", tags=["rentals"])


@router.get("/", response_model=Envelope[List[RentalOut]])
def list_rentals(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(RentalService(db).get_all_rentals())


@router.post("/", response_model=Envelope[RentalOut], status_code=status.HTTP_201_CREATED)
def create_rental(
    payload: RentalCreate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(RentalService(db).create_rental(current_user, payload), "Rental created successfully")


@router.put("/{rental_id}", response_model=Envelope[RentalOut])
def update_rental(
    rental_id: int,
    payload: RentalUpdate,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    return ok(RentalService(db).update_rental(rental_id, payload), "Rental updated successfully")


@router.delete("/{rental_id}", response_model=Envelope[None])
def delete_rental(
    rental_id: int,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_staff),
):
    RentalService(db).delete_rental(rental_id)
    return ok(message="Rental deleted successfully")
